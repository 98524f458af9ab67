"""
records.py - Input Records
==========================
The flat records a flow document is made of, and the loader that turns
the JSON document into them.

    {
      "commandEvents":  [ {"from": "PlaceOrder", "to": ["OrderPlaced"]} ],
      "policyCommands": [ {"policy": "NotifyWarehouse",
                           "fromEvent": "OrderPlaced",
                           "toCommand": "ShipOrder"} ]
    }

Design decisions:
  - Records are frozen dataclasses; the builder only reads them.
  - Missing or empty names are accepted verbatim (they become nodes with
    an empty label).  Only values of the wrong JSON type are rejected,
    since nothing sensible can be drawn from them.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Tuple, Union

log = logging.getLogger(__name__)


class FlowDataError(ValueError):
    """The flow document could not be read or has values of the wrong type."""


# ---------------------------------------------------------------------------
# Records
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class CommandEvent:
    """A command and the events it emits, in declared order."""

    command: str
    events:  Tuple[str, ...] = ()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CommandEvent":
        _expect(data, dict, "commandEvents entry")
        events = _list_or_empty(data.get("to"))
        _expect(events, list, "commandEvents[].to")
        return cls(
            command=_name(data.get("from", ""), "commandEvents[].from"),
            events=tuple(_name(e, "commandEvents[].to[]") for e in events),
        )

    def to_dict(self) -> dict:
        return {"from": self.command, "to": list(self.events)}


@dataclass(frozen=True)
class PolicyCommand:
    """A policy triggered by `event` that issues `command`."""

    policy:  str
    event:   str
    command: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PolicyCommand":
        _expect(data, dict, "policyCommands entry")
        return cls(
            policy=_name(data.get("policy", ""), "policyCommands[].policy"),
            event=_name(data.get("fromEvent", ""), "policyCommands[].fromEvent"),
            command=_name(data.get("toCommand", ""), "policyCommands[].toCommand"),
        )

    def to_dict(self) -> dict:
        return {"policy": self.policy, "fromEvent": self.event, "toCommand": self.command}


@dataclass(frozen=True)
class FlowData:
    command_events:  Tuple[CommandEvent, ...]  = field(default_factory=tuple)
    policy_commands: Tuple[PolicyCommand, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FlowData":
        _expect(data, dict, "flow document")
        command_events  = _list_or_empty(data.get("commandEvents"))
        policy_commands = _list_or_empty(data.get("policyCommands"))
        _expect(command_events, list, "commandEvents")
        _expect(policy_commands, list, "policyCommands")
        return cls(
            command_events=tuple(CommandEvent.from_dict(c) for c in command_events),
            policy_commands=tuple(PolicyCommand.from_dict(p) for p in policy_commands),
        )

    def to_dict(self) -> dict:
        return {
            "commandEvents":  [c.to_dict() for c in self.command_events],
            "policyCommands": [p.to_dict() for p in self.policy_commands],
        }


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------
def load_flow_data(path: Union[str, Path]) -> FlowData:
    """Read a flow document from a UTF-8 JSON file."""
    path = Path(path)
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise FlowDataError(f"cannot read flow document {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise FlowDataError(f"cannot decode flow document {path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise FlowDataError(f"invalid JSON in {path}: {exc}") from exc

    data = FlowData.from_dict(raw)
    log.info(
        "loaded %s: %d command records, %d policy records",
        path, len(data.command_events), len(data.policy_commands),
    )
    return data


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _expect(value: Any, kind: type, what: str) -> None:
    if not isinstance(value, kind):
        raise FlowDataError(f"{what} must be a {kind.__name__}, got {type(value).__name__}")


def _list_or_empty(value: Any) -> Any:
    return [] if value is None else value


def _name(value: Any, what: str) -> str:
    if value is None:
        return ""
    _expect(value, str, what)
    return value
