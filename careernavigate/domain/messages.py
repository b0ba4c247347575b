"""Chat message and AI response models.

Message content sent to, or received from, the chat completion service is
either a plain string or an ordered list of content parts. Parts are a
tagged union on ``kind``: text blocks and file references. Parts of any
other kind returned by a provider are kept as their raw mapping.
"""

from pathlib import PurePosixPath
from typing import Annotated, Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

from .models import RoadmapStep

Role = Literal["system", "user", "assistant"]


class TextPart(BaseModel):
    """A block of text inside a multi-part message."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["text"] = "text"
    text: str

    def to_wire(self) -> Dict[str, Any]:
        return {"type": "text", "text": self.text}


class FilePart(BaseModel):
    """A reference to a stored file attached to a message.

    ``reference`` is the blob storage path. When ``data_url`` is set the file
    travels inline (``data:<mime>;base64,...``); otherwise only the reference
    is sent and the provider must already know it.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["file"] = "file"
    reference: str
    filename: Optional[str] = None
    data_url: Optional[str] = None

    def to_wire(self) -> Dict[str, Any]:
        file: Dict[str, Any] = {"filename": self.filename or PurePosixPath(self.reference).name}
        if self.data_url:
            file["file_data"] = self.data_url
        else:
            file["file_id"] = self.reference
        return {"type": "file", "file": file}


ContentPart = Annotated[Union[TextPart, FilePart], Field(discriminator="kind")]

MessageContent = Union[str, List[ContentPart]]


def parse_content_part(raw: Any) -> Any:
    """Turn one provider content element into a TextPart/FilePart where possible.

    Strings and parts of unknown kind come back unchanged.
    """
    if not isinstance(raw, dict):
        return raw

    kind = raw.get("type", raw.get("kind"))
    if kind in ("text", "output_text") and isinstance(raw.get("text"), str):
        return TextPart(text=raw["text"])
    if kind == "file":
        file = raw.get("file") if isinstance(raw.get("file"), dict) else raw
        reference = file.get("file_id") or file.get("reference") or file.get("puter_path")
        filename = file.get("filename")
        if isinstance(reference, str):
            return FilePart(
                reference=reference, filename=filename if isinstance(filename, str) else None
            )
    return raw


class ChatMessage(BaseModel):
    """One turn of a conversation.

    ``roadmap`` is attached to assistant turns that carried a structured
    learning plan; it is display data and never sent back to the provider.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: MessageContent
    roadmap: Optional[Tuple[RoadmapStep, ...]] = None

    def to_wire(self) -> Dict[str, Any]:
        if isinstance(self.content, str):
            content: Any = self.content
        else:
            content = [part.to_wire() for part in self.content]
        return {"role": self.role, "content": content}


class ChatResponse(BaseModel):
    """What the chat completion service returned for one request.

    ``content`` is deliberately untyped: a string, a list of parts (see
    parse_content_part), or whatever else the provider put there. Always run
    it through careernavigate.parsing.normalize_content before use.
    """

    content: Any = None
    model: Optional[str] = None
    finish_reason: Optional[str] = None
    usage: Dict[str, int] = Field(default_factory=dict)

