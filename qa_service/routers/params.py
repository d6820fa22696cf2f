# qa_service/routers/params.py

from typing import Optional

from fastapi import Path, Query
from typing_extensions import Annotated

from ..models import MAX_ID

# Ids outside the INTEGER range are rejected as validation errors before any query runs.
ResourceId = Annotated[int, Path(ge=1, le=MAX_ID)]
CategoryFilter = Annotated[
    Optional[int], Query(ge=1, le=MAX_ID, description="Only questions in this category id.")
]
