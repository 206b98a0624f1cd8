# -*- coding: utf-8 -*-
"""Block documents — the content model behind the note editor.

A note's ``content`` string is a JSON array of blocks::

    [{"id": "...", "type": "text", "content": "Hello"},
     {"id": "...", "type": "table", "content": [["h1", "h2"], ["", ""]]}]

Every mutator returns a new list and leaves its input untouched. Addressing a
block id that is not in the sequence is a no-op; table operations on a block
of another kind raise ``BlockKindError``.
"""

from __future__ import annotations

import json
import logging
import math
from typing import Annotated, Any, List, Literal, Optional, Sequence, Union
from uuid import uuid4

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError,
    ValidationInfo,
    field_validator,
    model_validator,
)

from ..errors import ValidationFailure

logger = logging.getLogger(__name__)

BlockKind = Literal["text", "image", "drawing", "chart", "table"]

RICH_MEDIA_PLACEHOLDER = "[Rich Media]"


class BlockKindError(ValidationFailure):
    """The addressed block is not of the kind the operation needs."""


class CellOutOfRange(ValidationFailure):
    """Table cell coordinates outside the grid."""


class _BlockBase(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)


class TextBlock(_BlockBase):
    type: Literal["text"] = "text"
    content: str = ""


class ImageBlock(_BlockBase):
    type: Literal["image"] = "image"
    content: str = Field(..., description="Self-contained image payload, e.g. a data URI")


class DrawingBlock(_BlockBase):
    type: Literal["drawing"] = "drawing"
    content: str = Field(..., description="Canvas export as a data URI")


class ChartPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    value: float = Field(..., allow_inf_nan=False)

    @field_validator("value", mode="before")
    @classmethod
    def _stored_gap_is_zero(cls, value: Any, info: ValidationInfo) -> Any:
        # Saved charts hold null where the client serialized NaN.
        if not (info.context or {}).get("lenient"):
            return value
        if value is None or (isinstance(value, float) and not math.isfinite(value)):
            return 0.0
        return value


class ChartBlock(_BlockBase):
    type: Literal["chart"] = "chart"
    content: List[ChartPoint] = Field(default_factory=list)


class TableBlock(_BlockBase):
    type: Literal["table"] = "table"
    content: List[List[str]]

    @model_validator(mode="after")
    def _rectangular(self) -> "TableBlock":
        if not self.content or not self.content[0]:
            raise ValueError("table needs at least one row and one column")
        width = len(self.content[0])
        for i, row in enumerate(self.content):
            if len(row) != width:
                raise ValueError(f"row {i} has {len(row)} cells, expected {width}")
        return self

    @property
    def column_count(self) -> int:
        return len(self.content[0])


Block = Annotated[
    Union[TextBlock, ImageBlock, DrawingBlock, ChartBlock, TableBlock],
    Field(discriminator="type"),
]

_ONE_BLOCK: TypeAdapter = TypeAdapter(Block)
_BLOCK_LIST: TypeAdapter = TypeAdapter(List[Block])


def new_block_id() -> str:
    return uuid4().hex


def new_table() -> List[List[str]]:
    return [["Header 1", "Header 2"], ["Data 1", "Data 2"]]


def new_chart() -> List[dict]:
    return [{"name": "Item A", "value": 50}, {"name": "Item B", "value": 30}]


_DEFAULT_CONTENT = {
    "text": lambda: "",
    "chart": new_chart,
    "table": new_table,
}


def make_block(kind: str, content: Any = None, block_id: Optional[str] = None) -> Block:
    if content is None and kind in _DEFAULT_CONTENT:
        content = _DEFAULT_CONTENT[kind]()
    data = {"id": block_id or new_block_id(), "type": kind, "content": content}
    try:
        return _ONE_BLOCK.validate_python(data)
    except ValidationError as exc:
        raise ValidationFailure(f"Invalid {kind} block: {exc}") from exc


def _legacy(raw: str) -> List[Block]:
    return [TextBlock(id=new_block_id(), content=raw)]


def _dedupe_ids(blocks: List[Block]) -> List[Block]:
    seen: set[str] = set()
    out: List[Block] = []
    for block in blocks:
        if block.id in seen:
            block = block.model_copy(update={"id": new_block_id()})
        seen.add(block.id)
        out.append(block)
    return out


def parse(persisted: Optional[str]) -> List[Block]:
    """Persisted content -> blocks. Never raises.

    Anything that is not a JSON array of valid blocks (legacy plain-text notes,
    foreign JSON, corrupted data) becomes one text block holding the raw string.
    """
    raw = persisted if isinstance(persisted, str) else ("" if persisted is None else str(persisted))
    try:
        decoded = json.loads(raw)
    except (ValueError, RecursionError):
        return _legacy(raw)
    if not isinstance(decoded, list):
        return _legacy(raw)
    try:
        blocks = _BLOCK_LIST.validate_python(decoded, context={"lenient": True})
    except ValidationError as exc:
        logger.debug("note content is not a block list, treating as text: %s", exc)
        return _legacy(raw)
    return _dedupe_ids(list(blocks))


def validate_blocks(raw: Any) -> List[Block]:
    """Strict counterpart of ``parse`` for editor input: raises instead of degrading."""
    try:
        blocks = list(_BLOCK_LIST.validate_python(raw))
    except ValidationError as exc:
        raise ValidationFailure(f"Invalid blocks: {exc}") from exc
    ids = [b.id for b in blocks]
    if len(set(ids)) != len(ids):
        raise ValidationFailure("Block ids must be unique within a note")
    return blocks


def serialize(blocks: Sequence[Block]) -> str:
    return json.dumps(
        [b.model_dump(mode="json") for b in blocks],
        ensure_ascii=False,
        separators=(",", ":"),
    )


def find_block(blocks: Sequence[Block], block_id: str) -> Optional[Block]:
    for block in blocks:
        if block.id == block_id:
            return block
    return None


def add_block(blocks: Sequence[Block], kind: str, content: Any = None) -> List[Block]:
    return [*blocks, make_block(kind, content)]


def update_block_content(blocks: Sequence[Block], block_id: str, content: Any) -> List[Block]:
    out: List[Block] = []
    for block in blocks:
        if block.id == block_id:
            block = make_block(block.type, content, block_id=block.id)
        out.append(block)
    return out


def remove_block(blocks: Sequence[Block], block_id: str) -> List[Block]:
    return [b for b in blocks if b.id != block_id]


def _table(blocks: Sequence[Block], block_id: str) -> Optional[TableBlock]:
    block = find_block(blocks, block_id)
    if block is None:
        return None
    if not isinstance(block, TableBlock):
        raise BlockKindError(f"Block {block_id} is a {block.type} block, not a table")
    return block


def append_table_row(blocks: Sequence[Block], block_id: str) -> List[Block]:
    table = _table(blocks, block_id)
    if table is None:
        return list(blocks)
    rows = [list(r) for r in table.content]
    rows.append([""] * table.column_count)
    return update_block_content(blocks, block_id, rows)


def update_table_cell(
    blocks: Sequence[Block],
    block_id: str,
    row: int,
    col: int,
    value: str,
) -> List[Block]:
    table = _table(blocks, block_id)
    if table is None:
        return list(blocks)
    if not (0 <= row < len(table.content)) or not (0 <= col < table.column_count):
        raise CellOutOfRange(
            f"Cell ({row}, {col}) outside {len(table.content)}x{table.column_count} table {block_id}"
        )
    rows = [list(r) for r in table.content]
    rows[row][col] = value
    return update_block_content(blocks, block_id, rows)


def is_blank_text(block: Block) -> bool:
    return isinstance(block, TextBlock) and not block.content.strip()


def prune_for_save(blocks: Sequence[Block]) -> List[Block]:
    """Drop blank text blocks, unless nothing would be left."""
    kept = [b for b in blocks if not is_blank_text(b)]
    return kept or list(blocks)


def has_content(blocks: Sequence[Block]) -> bool:
    return any(not is_blank_text(b) for b in blocks)


def preview(persisted: Optional[str], max_length: int = 100) -> str:
    blocks = parse(persisted)
    text = ""
    for block in blocks:
        if isinstance(block, TextBlock) and block.content.strip():
            text = " ".join(block.content.split())
            break
    has_media = any(not isinstance(b, TextBlock) for b in blocks)

    if not text:
        return RICH_MEDIA_PLACEHOLDER if has_media else ""
    excerpt = text[:max_length]
    if has_media or len(text) > max_length:
        excerpt += "..."
    return excerpt
