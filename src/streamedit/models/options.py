from __future__ import annotations
from pydantic import BaseModel
from ..binary.codecs.byteorder import ByteOrder, DEFAULT_BYTE_ORDER

class EditorOptions(BaseModel):
    byte_order: ByteOrder = DEFAULT_BYTE_ORDER
    read_only: bool = False
