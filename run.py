"""
チャットコメンテーター起動スクリプト
"""
import signal
import subprocess
import sys

from cohost.config import Config


def start_api_server():
    """APIサーバーを起動する"""
    api_cmd = [
        "uvicorn", "control_panel.control_api:app",
        "--host", Config.CONTROL_API_HOST,
        "--port", str(Config.CONTROL_API_PORT),
    ]
    api_process = subprocess.Popen(api_cmd)
    print(f"APIサーバーを起動しました: http://{Config.CONTROL_API_HOST}:{Config.CONTROL_API_PORT}")
    return api_process


def main():
    """メイン関数"""
    try:
        Config.validate()
    except ValueError as e:
        print(f"設定エラー: {e}")
        sys.exit(1)

    api_process = start_api_server()

    def signal_handler(sig, frame):
        print("終了シグナルを受信しました")
        api_process.terminate()
        api_process.wait()
        sys.exit(0)

    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    # プロセスが終了するまで待機
    try:
        api_process.wait()
    except KeyboardInterrupt:
        pass
    finally:
        if api_process.poll() is None:
            api_process.terminate()
            api_process.wait()


if __name__ == "__main__":
    main()
