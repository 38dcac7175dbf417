"""
AppleScript encoder: operations -> osascript source.

Logic Pro has no scriptable transport, so commands are sent as the
application's default key commands through System Events. Only the verbs
with a default key command are supported; mixer parameters are not.
"""

from __future__ import annotations

from ..errors import UnknownOperation, UnknownParameter
from ..operations import MixerOperation, Operation, TrackSelectOperation, TransportOperation
from ..profiles import ScriptProfile
from ..wire import ScriptMessage

# Transport verb -> System Events statement (default Logic Pro key commands)
TRANSPORT_KEYS: dict[str, str] = {
    "play": "key code 76",  # keypad Enter
    "stop": "key code 82",  # keypad 0
    "pause": "key code 65",  # keypad .
    "record": 'keystroke "r"',
    "rewind": 'keystroke ","',
    "forward": 'keystroke "."',
}

KEY_UP = 126
KEY_DOWN = 125

# Up-arrow presses used to park the selection on the first track
SELECT_RESET_STEPS = 128


def quote(text: str) -> str:
    """Quote a string literal for AppleScript"""
    escaped = text.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _ui_script(app_name: str, statements: list[str]) -> str:
    app = quote(app_name)
    body = "\n".join(f"        {s}" for s in statements)
    return (
        f"tell application {app} to activate\n"
        f'tell application "System Events"\n'
        f"    tell process {app}\n"
        f"{body}\n"
        f"    end tell\n"
        f"end tell"
    )


def encode_transport(op: TransportOperation, profile: ScriptProfile) -> ScriptMessage:
    statement = TRANSPORT_KEYS.get(op.verb)
    if statement is None:
        raise UnknownOperation(op.verb, TRANSPORT_KEYS)
    return ScriptMessage(_ui_script(profile.app_name, [statement]))


def encode_track_select(op: TrackSelectOperation, profile: ScriptProfile) -> ScriptMessage:
    statements = [
        f"repeat {SELECT_RESET_STEPS} times",
        f"    key code {KEY_UP}",
        "end repeat",
    ]
    if op.number > 1:
        statements += [
            f"repeat {op.number - 1} times",
            f"    key code {KEY_DOWN}",
            "end repeat",
        ]
    return ScriptMessage(_ui_script(profile.app_name, statements))


def encode(op: Operation, profile: ScriptProfile) -> ScriptMessage:
    """Encode any operation for the AppleScript backend."""
    if isinstance(op, TransportOperation):
        return encode_transport(op, profile)
    if isinstance(op, MixerOperation):
        raise UnknownParameter(op.parameter, [])
    if isinstance(op, TrackSelectOperation):
        return encode_track_select(op, profile)
    raise UnknownOperation(type(op).__name__, ["transport", "track"], kind="operation")
