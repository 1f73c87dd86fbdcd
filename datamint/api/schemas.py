from typing import Any

from pydantic import BaseModel


class MintRequest(BaseModel):
    """Body of POST /api/mint-dataset: the metadata built by /api/datasets/validate."""

    metadata: dict[str, Any] | None = None
