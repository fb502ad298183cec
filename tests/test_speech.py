import threading

import pytest

from cohost import speech
from cohost.speech import Speak, SpeechUnavailableError


class FakeVoice:
    def __init__(self, id, name, languages=()):
        self.id = id
        self.name = name
        self.languages = list(languages)


class FakeEngine:
    def __init__(self, owner):
        self.owner = owner
        self.thread = threading.get_ident()
        self.properties = {}
        self.said = []

    def getProperty(self, name):
        return self.owner.voices if name == 'voices' else self.properties.get(name)

    def setProperty(self, name, value):
        assert threading.get_ident() == self.thread
        self.properties[name] = value

    def say(self, text):
        assert threading.get_ident() == self.thread
        self.said.append(text)

    def runAndWait(self):
        assert threading.get_ident() == self.thread

    def stop(self):
        pass


class FakePyttsx3:
    def __init__(self, voices=(), fail=False):
        self.voices = list(voices)
        self.fail = fail
        self.engines = []

    def init(self):
        if self.fail:
            raise RuntimeError("no driver")
        engine = FakeEngine(self)
        self.engines.append(engine)
        return engine


@pytest.fixture
def fake_pyttsx3(monkeypatch):
    fake = FakePyttsx3(voices=[
        FakeVoice("english", "English", ["en_US"]),
        FakeVoice("spanish", "Spanish", ["es_ES"]),
    ])
    monkeypatch.setattr(speech, "pyttsx3", fake)
    return fake


class TestSpeak:

    def test_engine_is_checked_on_worker_thread(self, fake_pyttsx3):
        speaker = Speak()
        try:
            assert speaker.is_available()
            assert fake_pyttsx3.engines[0].thread != threading.get_ident()
        finally:
            speaker.shutdown()

    @pytest.mark.asyncio
    async def test_speaks_on_engine_created_in_worker(self, fake_pyttsx3):
        speaker = Speak(base_wpm=180)
        try:
            await speaker.speak("hola", rate=1.5, volume=0.4)
            await speaker.speak("adios")
        finally:
            speaker.shutdown()

        trial, first, second = fake_pyttsx3.engines
        assert first.said == ["hola"]
        assert second.said == ["adios"]
        assert first.thread == trial.thread
        assert first.properties == {"rate": 270, "volume": 0.4, "voice": "spanish"}
        assert not speaker.is_speaking()

    @pytest.mark.asyncio
    async def test_unavailable_engine(self, monkeypatch):
        monkeypatch.setattr(speech, "pyttsx3", FakePyttsx3(fail=True))
        speaker = Speak()
        try:
            assert not speaker.is_available()
            with pytest.raises(SpeechUnavailableError):
                await speaker.speak("hola")
        finally:
            speaker.shutdown()
