import sys
from datetime import datetime


def _format_command_name(command: str) -> str:
    return command.replace("_", " ").capitalize()


def _render_event_message(event: str, fields: dict) -> str:
    if event == "window.started":
        return f"{_format_command_name(str(fields.get('command', 'window')))} window requested for zone {fields.get('zone')}."

    if event == "window.resolved":
        return (
            "Window UTC: "
            f"{fields.get('start_iso')} -> {fields.get('end_iso')} ({fields.get('zone')})"
        )

    if event == "window.failed":
        label = _format_command_name(str(fields.get("command", "window")))
        return f"{label} window failed: {fields.get('error')}"

    if event == "tzdb.unavailable":
        return f"Timezone database unavailable: {fields.get('error')}"

    details = ", ".join(f"{key}={value}" for key, value in fields.items())
    return f"{event}: {details}" if details else event


def log_event(event: str, **fields):
    timestamp = datetime.now().strftime("%I:%M:%S %p")
    message = _render_event_message(event, fields)
    print(f"{timestamp}  {message}", file=sys.stderr)
