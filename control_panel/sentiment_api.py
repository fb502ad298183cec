"""
感情分析APIモジュール（Hugging Face Inference API の中継）
"""
from typing import Optional

import requests
from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from cohost.config import Config
from utils.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

FALLBACK_RESULT = {"sentiment": "NEUTRAL", "confidence": 0.5, "fallback": True}


class SentimentRequest(BaseModel):
    """感情分析リクエスト"""
    text: Optional[str] = None


def _top_prediction(result) -> Optional[dict]:
    """[{label, score}] と [[{label, score}, ...]] の両方に対応する"""
    if not isinstance(result, list) or not result:
        return None
    first = result[0]
    if isinstance(first, list):
        candidates = [item for item in first if isinstance(item, dict) and item.get("label")]
        if not candidates:
            return None
        return max(candidates, key=lambda item: item.get("score") or 0)
    if isinstance(first, dict) and first.get("label"):
        return first
    return None


def classify(text: str) -> dict:
    """
    Hugging Face のモデルで感情を分類する

    Args:
        text: 分類するテキスト

    Returns:
        dict: sentiment / confidence / fallback
    """
    headers = {"Content-Type": "application/json"}
    if Config.HUGGINGFACE_API_TOKEN:
        headers["Authorization"] = f"Bearer {Config.HUGGINGFACE_API_TOKEN}"

    url = f"{Config.HUGGINGFACE_API_URL}/{Config.HUGGINGFACE_SENTIMENT_MODEL}"
    try:
        response = requests.post(url, headers=headers, json={"inputs": text}, timeout=30)
        if not response.ok:
            logger.warning(f"Sentiment API returned {response.status_code}: {response.reason}")
            return dict(FALLBACK_RESULT)

        prediction = _top_prediction(response.json())
        if prediction is None:
            return dict(FALLBACK_RESULT)

        return {
            "sentiment": str(prediction["label"]).upper(),
            "confidence": prediction.get("score") or 0.5,
            "fallback": False,
        }
    except Exception as e:
        logger.error(f"Sentiment API error: {e}")
        return dict(FALLBACK_RESULT)


@router.post("/api/sentiment")
def analyze_sentiment(request: SentimentRequest):
    """テキストの感情を分析する"""
    if not request.text:
        return JSONResponse(status_code=400, content={"error": "Text is required"})

    logger.info(f"Analyzing sentiment for: {request.text}")
    return classify(request.text)
