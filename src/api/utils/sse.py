from src.domain.entities import ChangeEvent


def format_sse(event: ChangeEvent) -> str:
    """One Server-Sent-Events frame; the event name is the change kind"""
    return f"event: {event.kind.value}\ndata: {event.model_dump_json()}\n\n"


KEEPALIVE = ": keepalive\n\n"
