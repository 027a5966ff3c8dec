"""Mapping of raw dictionary feature lines into named records."""

from __future__ import annotations

from typing import List, Optional

from .models import FEATURE_NAMES, AnalyzerToken, Record


WILDCARD = "*"
FIELD_SEPARATOR = ","
SUB_FIELD_SEPARATOR = "-"


def split_sub_fields(raw_feature: str) -> List[str]:
    """Split on every comma, then every field on every dash, flattened."""

    sub_fields: List[str] = []
    for field in raw_feature.split(FIELD_SEPARATOR):
        sub_fields.extend(field.split(SUB_FIELD_SEPARATOR))
    return sub_fields


def _normalize(value: str) -> Optional[str]:
    return None if value == WILDCARD else value


def map_features(surface: str, raw_feature: str) -> Record:
    """Build a word record from a surface form and its raw feature line.

    Sub-fields are bound to :data:`FEATURE_NAMES` in order. Sub-fields past
    the twelfth are dropped and names without a sub-field are left out of
    the record entirely. The wildcard ``*`` becomes ``None``.
    """

    record: Record = {"source": surface}
    for name, value in zip(FEATURE_NAMES, split_sub_fields(raw_feature)):
        record[name] = _normalize(value)
    return record


def map_token(token: AnalyzerToken) -> Record:
    return map_features(token.surface, token.raw_feature)
