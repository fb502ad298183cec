"""
コントロールAPIモジュール
"""
import asyncio
from typing import Optional

from fastapi import FastAPI, WebSocket
from pydantic import BaseModel

from cohost.controller import AssistantController
from control_panel.sentiment_api import router as sentiment_router
from utils.logger import get_logger, log_queue

logger = get_logger(__name__)

# FastAPIアプリケーション
app = FastAPI(title="Chat Cohost Control API")
app.include_router(sentiment_router)

# コントローラー
controller = AssistantController()


@app.on_event("shutdown")
async def shutdown_event():
    """アプリケーション終了時の処理"""
    logger.info("APIサーバーを停止します")
    if controller.is_active:
        await controller.stop()


class StartRequest(BaseModel):
    """開始リクエスト"""
    platform: Optional[str] = None  # "twitch" or "youtube"
    video_id: Optional[str] = None


class TextRequest(BaseModel):
    """テキストを受け取るリクエスト"""
    text: str


class ConfigUpdateRequest(BaseModel):
    """設定更新リクエスト"""
    read_all_messages: Optional[bool] = None
    generate_opinions: Optional[bool] = None
    voice_rate: Optional[float] = None
    voice_pitch: Optional[float] = None
    voice_volume: Optional[float] = None
    enable_tts: Optional[bool] = None
    enable_stt: Optional[bool] = None
    enable_voice: Optional[bool] = None


class VoiceStartRequest(BaseModel):
    """音声認識開始リクエスト"""
    mic_index: Optional[int] = None


@app.post("/start")
async def start_assistant(request: StartRequest):
    """アシスタントを開始する"""
    try:
        await controller.start(platform=request.platform, video_id=request.video_id)
        return {"status": "success"}
    except Exception as e:
        logger.error(f"Error starting assistant: {e}")
        return {"status": "error", "message": str(e)}


@app.post("/stop")
async def stop_assistant():
    """アシスタントを停止する"""
    try:
        await controller.stop()
        return {"status": "success"}
    except Exception as e:
        logger.error(f"Error stopping assistant: {e}")
        return {"status": "error", "message": str(e)}


@app.get("/status")
async def get_status():
    """ステータスを取得する"""
    return {**controller.get_status(), "voice_status": controller.get_voice_status()}


@app.get("/config")
async def get_config():
    return controller.get_config()


@app.post("/config")
async def update_config(request: ConfigUpdateRequest):
    """設定を更新する"""
    try:
        config = controller.update_config(**request.model_dump(exclude_none=True))
        return {"status": "success", "config": config.to_dict()}
    except Exception as e:
        logger.error(f"Error updating config: {e}")
        return {"status": "error", "message": str(e)}


@app.post("/opinion")
async def test_opinion(request: TextRequest):
    """テストメッセージに対するコメントを生成する"""
    try:
        opinion = await controller.generate_opinion(request.text)
        return {"status": "success", "opinion": opinion}
    except Exception as e:
        logger.error(f"Error generating opinion: {e}")
        return {"status": "error", "message": str(e)}


@app.get("/opinions")
async def recent_opinions():
    """最近生成したコメント"""
    return {"opinions": list(controller.recent_opinions)}


@app.post("/speak")
async def speak_text(request: TextRequest):
    """テキストを読み上げる"""
    await controller.speak(request.text)
    return {"status": "success"}


@app.post("/voice/start")
async def start_voice_recognition(request: VoiceStartRequest):
    """音声コマンドの受付を開始する"""
    await controller.start_voice_recognition(request.mic_index)
    if not controller.get_voice_status()["is_listening"]:
        return {"status": "error", "message": "Voice recognition is not available"}
    return {"status": "success"}


@app.post("/voice/stop")
async def stop_voice_recognition():
    """音声コマンドの受付を停止する"""
    try:
        await controller.stop_voice_recognition()
        return {"status": "success"}
    except Exception as e:
        logger.error(f"Error stopping voice recognition: {e}")
        return {"status": "error", "message": str(e)}


@app.get("/voice/devices")
async def get_audio_devices():
    """利用可能なオーディオデバイスのリストを取得する"""
    try:
        from cohost.voice_listener import VoiceListener
        return {"status": "success", "devices": VoiceListener.list_microphones()}
    except Exception as e:
        logger.error(f"Error getting audio devices: {e}")
        return {"status": "error", "message": str(e), "devices": []}


@app.websocket("/logs")
async def websocket_endpoint(ws: WebSocket):
    """ログをWebSocketで配信する"""
    await ws.accept()
    loop = asyncio.get_running_loop()

    try:
        while True:
            log_record = await loop.run_in_executor(None, log_queue.get)
            await ws.send_json({
                "timestamp": log_record.created,
                "level": log_record.levelname,
                "message": log_record.getMessage()
            })
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
