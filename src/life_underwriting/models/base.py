# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Base Pydantic model configuration for all underwriting records.

Every input and result record in the engine derives from
:class:`BaseModelConfig`, so applications, intermediate assessments and the
final result are immutable once constructed.
"""

import re

from beartype import beartype
from pydantic import BaseModel, ConfigDict

_SEPARATORS = re.compile(r"[\s\-]+")


@beartype
class BaseModelConfig(BaseModel):
    """Base model with strict configuration for all underwriting records.

    Enforces:
    - Immutability (frozen=True)
    - No extra fields allowed (extra="forbid")
    - Validation on assignment
    - Automatic whitespace stripping
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_assignment=True,
        str_strip_whitespace=True,
        validate_default=True,
    )


@beartype
def normalize_code(value: str) -> str:
    """Normalise a free-text code to UPPER_SNAKE_CASE ("rock climbing" -> "ROCK_CLIMBING")."""
    return _SEPARATORS.sub("_", value.strip()).upper()
