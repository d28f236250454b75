"""The single value returned to the transport for every tool call"""

from dataclasses import dataclass
from typing import List

from mcp.types import TextContent


@dataclass(frozen=True)
class OperationResult:
    succeeded: bool
    text: str

    @classmethod
    def success(cls, text: str) -> "OperationResult":
        return cls(succeeded=True, text=text)

    @classmethod
    def failure(cls, text: str) -> "OperationResult":
        return cls(succeeded=False, text=text)

    def to_text_content(self) -> List[TextContent]:
        return [TextContent(type="text", text=self.text)]
