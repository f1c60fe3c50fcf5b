"""Value normalizers and header canonicalisation."""

from penguinetl.normalizers.base import BaseNormalizer
from penguinetl.normalizers.columns import (
    canonicalize_column_name,
    canonicalize_columns,
    canonicalize_names,
)
from penguinetl.normalizers.date import DateNormalizer, YearNormalizer, parse_date
from penguinetl.normalizers.helpers import is_na
from penguinetl.normalizers.numeric import NumericNormalizer
from penguinetl.normalizers.registry import NormalizerRegistry, registry
from penguinetl.normalizers.string import (
    FirstTokenNormalizer,
    LowerCaseNormalizer,
    StringNormalizer,
)

registry.register("string", StringNormalizer())
registry.register("lower", LowerCaseNormalizer())
registry.register("first_token", FirstTokenNormalizer())
registry.register("numeric", NumericNormalizer())
registry.register("date", DateNormalizer())
registry.register("year", YearNormalizer())

__all__ = [
    "BaseNormalizer",
    "DateNormalizer",
    "FirstTokenNormalizer",
    "LowerCaseNormalizer",
    "NormalizerRegistry",
    "NumericNormalizer",
    "StringNormalizer",
    "YearNormalizer",
    "canonicalize_column_name",
    "canonicalize_columns",
    "canonicalize_names",
    "is_na",
    "parse_date",
    "registry",
]
