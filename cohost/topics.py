"""
話題抽出モジュール
"""
import re
from typing import Dict, Pattern, Set

from .models import Topic

# 話題ごとの単語境界パターン（大文字小文字は区別しない）
TOPIC_PATTERNS: Dict[Topic, Pattern] = {
    Topic.GAMING: re.compile(
        r"\b(juego|juegos|jugar|jugando|juega|game|games|gaming|gamer|partida|nivel|boss)\b", re.IGNORECASE
    ),
    Topic.STREAMING: re.compile(
        r"\b(stream|streams|streamer|directo|en vivo|live|twitch|canal|transmisión|transmision)\b", re.IGNORECASE
    ),
    Topic.MUSIC: re.compile(
        r"\b(música|musica|canción|cancion|canciones|music|song|songs|playlist|rola)\b", re.IGNORECASE
    ),
    Topic.CHAT: re.compile(r"\b(chat|chatters|mensaje|mensajes|comentario)\b", re.IGNORECASE),
    Topic.ENGAGEMENT: re.compile(
        r"\b(follow|sigue|seguir|like|likes|suscri\w*|sub|subs|prime|bits|raid|donación|donacion)\b", re.IGNORECASE
    ),
    Topic.SKILL: re.compile(
        r"\b(noob|pro|crack|manco|skill|habilidad|tryhard|malísimo|malisimo)\b", re.IGNORECASE
    ),
    Topic.GREETING: re.compile(
        r"\b(hola|hello|hi|hey|buenas|saludos|buenos días|buenos dias|buenas noches)\b", re.IGNORECASE
    ),
    Topic.QUESTION: re.compile(r"\?|\b(qué|cómo|cuándo|dónde|por qué|cuál|quién)\b", re.IGNORECASE),
    Topic.HUMOR: re.compile(r"\b((ja){2,}\w*|(je){2,}\w*|lol|lmao|xd+|meme)\b|😂|🤣", re.IGNORECASE),
    Topic.SUCCESS: re.compile(
        r"\b(gg|ganamos|ganaste|ganó|victoria|win|clutch|épico|epico)\b", re.IGNORECASE
    ),
    Topic.FAILURE: re.compile(
        r"\b(perdimos|perdiste|perdió|derrota|fail|rip|murió|murio|lose|f)\b", re.IGNORECASE
    ),
}


class TopicExtractor:
    """テキストから話題タグを抽出する"""

    def __init__(self, patterns: Dict[Topic, Pattern] = None):
        self.patterns = patterns or TOPIC_PATTERNS

    def extract(self, text: str) -> Set[Topic]:
        """
        話題を抽出する

        Args:
            text: メッセージ本文

        Returns:
            Set[Topic]: 一致した話題（何も一致しなければ空集合）
        """
        if not text:
            return set()
        return {topic for topic, pattern in self.patterns.items() if pattern.search(text)}
