import pytest

from cohost.config import AssistantConfig


class TestAssistantConfig:

    def test_update_clamps_ranges(self):
        config = AssistantConfig()
        config.update(voice_volume=5, voice_rate=0.1)
        assert config.voice_volume == 1.0
        assert config.voice_rate == 0.5

    def test_update_ignores_none(self):
        config = AssistantConfig(read_all_messages=True)
        config.update(read_all_messages=None, generate_opinions=False)
        assert config.read_all_messages is True
        assert config.generate_opinions is False

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            AssistantConfig().update(shout=True)

    def test_to_dict_is_a_copy(self):
        config = AssistantConfig()
        data = config.to_dict()
        data["voice_volume"] = 0.2
        assert config.voice_volume == 0.8
        assert set(data) == {
            "read_all_messages", "generate_opinions", "voice_rate", "voice_pitch",
            "voice_volume", "enable_tts", "enable_stt", "enable_voice",
        }
