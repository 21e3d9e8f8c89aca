from typing import Union

from pydantic import BaseModel, Field

from duel_engine.constants import MESSAGES

ParamValue = Union[str, int, float]


class LogEvent(BaseModel):
    """One narration event: a MESSAGES tag plus the values its template needs."""

    tag: str
    params: dict[str, ParamValue] = Field(default_factory=dict)

    def render(self) -> str:
        values = dict(self.params)
        source = values.get("source")
        values["source"] = f" from {source}" if source else ""
        return MESSAGES[self.tag].format(**values)


class BattleLog(BaseModel):
    """Ordered narration of a battle. Text is produced only by render()."""

    events: list[LogEvent] = Field(default_factory=list)

    def add(self, tag: str, **params: ParamValue) -> LogEvent:
        if tag not in MESSAGES:
            raise KeyError(f"unknown narration tag {tag!r}")
        event = LogEvent(tag=tag, params=params)
        self.events.append(event)
        return event

    def mark(self) -> int:
        """Position to pass to since() to collect the events appended after this point."""
        return len(self.events)

    def since(self, mark: int) -> list[LogEvent]:
        return self.events[mark:]

    def tags(self, start: int = 0) -> list[str]:
        return [event.tag for event in self.events[start:]]

    def render(self, start: int = 0) -> str:
        return "".join(event.render() + "\n" for event in self.events[start:])

    def clear(self) -> None:
        self.events.clear()
