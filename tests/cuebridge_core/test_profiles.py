"""Tests for encoding profiles and the mixer map loader."""

import json

import pytest
from pydantic import ValidationError

from cuebridge_core.loader import load_mixer_map, load_mixer_map_from_file
from cuebridge_core.profiles import MixerMap, OscProfile, ScriptProfile
from cuebridge_core.wire import MidiMessage


class TestMixerMap:

    def test_defaults(self):
        mixer_map = MixerMap()

        assert mixer_map.per_track == {"volume": 7, "pan": 10}
        assert mixer_map.ranged == {"mute": 16, "solo": 32, "send1": 48, "send2": 64}
        assert mixer_map.global_channel == 0
        assert mixer_map.select_controller == 0

    def test_controller_range(self):
        with pytest.raises(ValidationError):
            MixerMap(per_track={"volume": 128})

    def test_channel_range(self):
        with pytest.raises(ValidationError):
            MixerMap(global_channel=16)

    def test_parameter_in_both_tables(self):
        with pytest.raises(ValidationError, match="mapped twice"):
            MixerMap(per_track={"volume": 7}, ranged={"volume": 20})

    def test_frozen(self):
        with pytest.raises(ValidationError):
            MixerMap().global_channel = 3


class TestOtherProfiles:

    def test_osc_address_must_start_with_slash(self):
        with pytest.raises(ValidationError, match="must start with '/'"):
            OscProfile(goto_address="transport/goto")

    def test_transport_prefix(self):
        assert OscProfile().transport_prefix == "/transport/"

    def test_script_app_name_required(self):
        with pytest.raises(ValidationError):
            ScriptProfile(app_name="")


class TestMidiMessage:

    def test_control_change_masks(self):
        assert MidiMessage.control_change(17, 200, 300).data == (0xB1, 200 & 0x7F, 300 & 0x7F)

    def test_sysex_properties(self):
        message = MidiMessage((0xF0, 0x7F, 0x7F, 0x06, 0x02, 0xF7))

        assert message.is_sysex is True
        assert message.is_control_change is False
        assert message.channel is None


class TestLoadMixerMap:

    def test_load(self):
        mixer_map = load_mixer_map({"mixer": {"ranged": {"mute": 20, "solo": 40}}})

        assert mixer_map.ranged == {"mute": 20, "solo": 40}
        assert mixer_map.per_track == {"volume": 7, "pan": 10}

    def test_missing_key(self):
        with pytest.raises(ValueError, match="'mixer' key"):
            load_mixer_map({"destinations": {}})

    def test_not_a_mapping(self):
        with pytest.raises(ValueError, match="must be a dictionary"):
            load_mixer_map({"mixer": [1, 2]})

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "mixer.yaml"
        path.write_text(
            "mixer:\n"
            "  global_channel: 2\n"
            "  ranged:\n"
            "    mute: 20\n",
            encoding="utf-8",
        )

        mixer_map = load_mixer_map_from_file(path)

        assert mixer_map.global_channel == 2
        assert mixer_map.ranged == {"mute": 20}

    def test_from_json(self, tmp_path):
        path = tmp_path / "mixer.json"
        path.write_text(json.dumps({"mixer": {"select_controller": 32}}), encoding="utf-8")

        assert load_mixer_map_from_file(str(path)).select_controller == 32

    def test_file_not_found(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_mixer_map_from_file(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("mixer: [unclosed", encoding="utf-8")

        with pytest.raises(ValueError, match="Invalid YAML"):
            load_mixer_map_from_file(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "mixer.toml"
        path.write_text("", encoding="utf-8")

        with pytest.raises(ValueError, match="Unsupported file format"):
            load_mixer_map_from_file(path)

    def test_top_level_not_dict(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")

        with pytest.raises(ValueError, match="must be a dictionary"):
            load_mixer_map_from_file(path)
