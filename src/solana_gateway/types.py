from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from solana_gateway.errors import GatewayError

JsonDict = dict[str, Any]


class CommandStatus(StrEnum):
    EXECUTED = "executed"
    FAILED = "failed"


@dataclass(slots=True, frozen=True)
class CommandResult:
    command: str
    status: CommandStatus
    details: JsonDict = field(default_factory=dict)

    @classmethod
    def from_error(cls, command: str, error: GatewayError) -> CommandResult:
        return cls(command=command, status=CommandStatus.FAILED, details=error.as_dict())

    @property
    def exit_code(self) -> int:
        return 0 if self.status == CommandStatus.EXECUTED else 1

    def to_dict(self) -> JsonDict:
        return {
            "command": self.command,
            "status": self.status.value,
            "details": self.details,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), sort_keys=True, separators=(",", ":"))
