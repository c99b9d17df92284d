"""
Curriculum loading.

The curriculum is read once per process from a JSON document and shared
read-only by every request.
"""

import json
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from tsea.config import get_settings
from tsea.curriculum.models import Curriculum
from tsea.logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_CURRICULUM_PATH = Path(__file__).resolve().parent / "data" / "curriculum.json"


def load_curriculum(path: Union[str, Path]) -> Curriculum:
    """
    Load and validate a curriculum document.

    Raises:
        FileNotFoundError: path does not exist
        pydantic.ValidationError: document violates the curriculum invariants
    """
    path = Path(path)
    with path.open(encoding="utf-8") as fh:
        data = json.load(fh)
    curriculum = Curriculum.model_validate(data)
    logger.info(
        "Curriculum loaded",
        extra={
            "path": str(path),
            "tracks": len(curriculum.tracks),
            "modules": len(curriculum.modules),
        },
    )
    return curriculum


@lru_cache
def get_curriculum(path: Optional[str] = None) -> Curriculum:
    """Get the process-wide curriculum (configured path or the packaged default)."""
    configured = path or get_settings().curriculum_path
    return load_curriculum(configured or DEFAULT_CURRICULUM_PATH)
