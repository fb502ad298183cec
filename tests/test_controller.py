import pytest

from cohost import twitch_listener
from cohost.config import AssistantConfig
from cohost.controller import AssistantController
from cohost.models import ChatMessage, Sentiment, Topic
from cohost.templates import SENTIMENT_RESPONSES, TOPIC_RESPONSES
from cohost.twitch_listener import TwitchChatListener


class FakeSpeech:
    def __init__(self, fail=False):
        self.spoken = []
        self.stopped = 0
        self.fail = fail

    async def speak(self, text, rate=1.0, pitch=1.0, volume=0.8):
        self.spoken.append((text, rate, volume))
        if self.fail:
            raise RuntimeError("no audio device")

    def stop(self):
        self.stopped += 1


class FakeResolver:
    def __init__(self, sentiment=Sentiment.NEUTRAL):
        self.sentiment = sentiment
        self.calls = []

    async def resolve(self, text):
        self.calls.append(text)
        return self.sentiment


class FakeListener:
    channel = "habbi3"

    def __init__(self):
        self.started = False
        self.stopped = False

    async def start(self):
        self.started = True

    async def stop(self):
        self.stopped = True

    def is_connected(self):
        return self.started and not self.stopped


def make_controller(scripted_random, speech=None, resolver=None, **config):
    config = AssistantConfig(**config)
    controller = AssistantController(
        config=config,
        speech=speech or FakeSpeech(),
        resolver=resolver or FakeResolver(),
        rng=scripted_random(),
        pacing_seconds=0,
        channel="habbi3",
    )
    listener = FakeListener()
    controller._create_listener = lambda video_id: listener
    return controller, listener


def chat(text, author="viewer"):
    return ChatMessage.create(text=text, author=author)


class TestAssistantController:

    @pytest.mark.asyncio
    async def test_start_and_stop(self, scripted_random):
        controller, listener = make_controller(scripted_random)

        await controller.start()
        assert listener.started
        assert controller.get_status()["is_active"]
        assert controller.get_status()["is_connected"]
        assert "habbi3" in controller.speech.spoken[0][0]

        await controller.stop()
        assert listener.stopped
        assert not controller.get_status()["is_active"]
        assert controller.speech.stopped == 1

    @pytest.mark.asyncio
    async def test_greeting_message_end_to_end(self, scripted_random):
        resolver = FakeResolver(Sentiment.NEUTRAL)
        controller, _ = make_controller(scripted_random, resolver=resolver, read_all_messages=True)
        await controller.start()

        controller.on_chat_message(chat("hola a todos"))
        await controller.queue.wait_idle()

        opinion = TOPIC_RESPONSES[Topic.GREETING][0]
        spoken = [text for text, _, _ in controller.speech.spoken[1:]]
        assert spoken == ["viewer dice: hola a todos", opinion]
        assert resolver.calls == ["hola a todos"]
        assert controller.memory.entries[-1].message == "hola a todos"
        assert controller.recent_opinions[-1]["opinion"] == opinion

    @pytest.mark.asyncio
    async def test_noise_never_reaches_queue(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver, read_all_messages=True)
        await controller.start()

        controller.on_chat_message(chat("a"))
        controller.on_chat_message(chat("buen stream", author="Nightbot"))
        await controller.queue.wait_idle()

        assert len(controller.queue) == 0
        assert resolver.calls == []
        assert len(controller.memory.entries) == 0

    @pytest.mark.asyncio
    async def test_inactive_assistant_drops_messages(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver, read_all_messages=True)

        controller.on_chat_message(chat("hola a todos"))
        await controller.queue.wait_idle()

        assert resolver.calls == []

    @pytest.mark.asyncio
    async def test_unannounced_message_gets_no_opinion(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver)
        await controller.start()

        controller.on_chat_message(chat("ok vale"))
        await controller.queue.wait_idle()

        assert resolver.calls == []
        assert len(controller.speech.spoken) == 1  # welcome only

    @pytest.mark.asyncio
    async def test_opinions_disabled(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver,
                                        read_all_messages=True, generate_opinions=False)
        await controller.start()

        controller.on_chat_message(chat("hola a todos"))
        await controller.queue.wait_idle()

        assert resolver.calls == []
        assert controller.speech.spoken[-1][0] == "viewer dice: hola a todos"

    @pytest.mark.asyncio
    async def test_speech_failure_is_absorbed(self, scripted_random):
        controller, _ = make_controller(scripted_random, speech=FakeSpeech(fail=True), read_all_messages=True)
        await controller.start()

        controller.on_chat_message(chat("ok vale"))
        controller.on_chat_message(chat("nada nuevo"))
        await controller.queue.wait_idle()

        assert [e.message for e in controller.memory.entries] == ["ok vale", "nada nuevo"]

    @pytest.mark.asyncio
    async def test_tts_disabled_still_composes(self, scripted_random):
        controller, _ = make_controller(scripted_random, read_all_messages=True, enable_tts=False)
        await controller.start()

        controller.on_chat_message(chat("ok vale"))
        await controller.queue.wait_idle()

        assert controller.speech.spoken == []
        assert controller.recent_opinions[-1]["opinion"] == SENTIMENT_RESPONSES[Sentiment.NEUTRAL][0]

    @pytest.mark.asyncio
    async def test_voice_command_updates_config_and_replies(self, scripted_random):
        controller, _ = make_controller(scripted_random)

        await controller.handle_voice_command("volume down please")

        assert controller.config.voice_volume == pytest.approx(0.6)
        assert controller.speech.spoken[-1][0] == "Volume decreased"
        assert controller.speech.spoken[-1][2] == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_generate_opinion(self, scripted_random):
        controller, _ = make_controller(scripted_random, resolver=FakeResolver(Sentiment.POSITIVE))

        opinion = await controller.generate_opinion("ok vale")

        assert opinion == SENTIMENT_RESPONSES[Sentiment.POSITIVE][0]

    def test_update_config(self, scripted_random):
        controller, _ = make_controller(scripted_random)
        controller.update_config(read_all_messages=True, voice_rate=3)
        assert controller.get_config()["read_all_messages"] is True
        assert controller.get_config()["voice_rate"] == 2.0

    @pytest.mark.asyncio
    async def test_failed_twitch_connection_rolls_back(self, scripted_random, monkeypatch):
        class RejectingBot:
            def __init__(self, listener, token, channel):
                pass

            async def start(self):
                raise RuntimeError("invalid oauth token")

            async def close(self):
                pass

        monkeypatch.setattr(twitch_listener, "_ChatBot", RejectingBot)
        controller, _ = make_controller(scripted_random)
        controller._create_listener = lambda video_id: TwitchChatListener(
            controller.on_chat_message, channel="habbi3", token="oauth:bad")

        with pytest.raises(ConnectionError):
            await controller.start(platform="twitch")

        assert not controller.is_active
        assert not controller.queue.is_active
        assert controller.speech.spoken == []

    @pytest.mark.asyncio
    async def test_streamer_speech_gets_an_opinion(self, scripted_random):
        resolver = FakeResolver(Sentiment.NEUTRAL)
        controller, _ = make_controller(scripted_random, resolver=resolver)

        await controller.handle_voice_command("hola a todos")

        opinion = TOPIC_RESPONSES[Topic.GREETING][0]
        assert resolver.calls == ["hola a todos"]
        assert controller.speech.spoken[-1][0] == f"Has dicho: hola a todos. Mi opinión: {opinion}"
        assert controller.recent_opinions[-1]["author"] == "Streamer (Voz)"
        assert controller.recent_opinions[-1]["opinion"] == opinion

    @pytest.mark.asyncio
    async def test_voice_command_is_not_commented(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver)

        await controller.handle_voice_command("stop talking")

        assert resolver.calls == []
        assert controller.speech.stopped == 1
        assert len(controller.recent_opinions) == 0

    @pytest.mark.asyncio
    async def test_streamer_speech_without_opinions(self, scripted_random):
        resolver = FakeResolver()
        controller, _ = make_controller(scripted_random, resolver=resolver, generate_opinions=False)

        await controller.handle_voice_command("que tal el juego")

        assert resolver.calls == []
        assert controller.speech.spoken == []
