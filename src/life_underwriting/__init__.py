# PolicyCore - Policy Decision Management System
# Copyright (C) 2025 Luiz Frias <luizf35@gmail.com>
# Form F[x] Labs
#
# This software is dual-licensed under AGPL-3.0 and Commercial License.
# For commercial licensing, contact: luizf35@gmail.com
# See LICENSE file for full terms.

"""Life underwriting risk engine - turns insurance applications into decisions."""

from .core.result_types import Err, Ok, Result
from .models import InsuranceApplication, InvalidInput, UnderwritingResult
from .services.underwriting import UnderwritingEngine

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "UnderwritingEngine",
    "InsuranceApplication",
    "UnderwritingResult",
    "InvalidInput",
    "Ok",
    "Err",
    "Result",
]
