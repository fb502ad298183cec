"""
ロギングユーティリティモジュール
"""
import logging
import os
import queue

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

# WebSocket配信用に全ロガーで共有するキュー
log_queue: queue.Queue = queue.Queue(maxsize=1000)


class QueueHandler(logging.Handler):
    """キューを使用したログハンドラ（満杯なら捨てる）"""

    def __init__(self, records: queue.Queue):
        super().__init__()
        self.records = records

    def emit(self, record):
        try:
            self.records.put_nowait(record)
        except queue.Full:
            pass


def get_logger(name: str) -> logging.Logger:
    """
    ロガーを取得する

    Args:
        name: ロガー名

    Returns:
        logging.Logger: コンソールと共有キューに出力するロガー
    """
    logger = logging.getLogger(name)

    if not logger.handlers:
        logger.setLevel(LOG_LEVEL)
        formatter = logging.Formatter(LOG_FORMAT)

        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        queue_handler = QueueHandler(log_queue)
        queue_handler.setFormatter(formatter)
        logger.addHandler(queue_handler)

        setattr(logger, 'log_queue', log_queue)

    return logger
