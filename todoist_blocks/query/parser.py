"""
Query parser for todoist-blocks.

Turns the raw text of a query block into a validated QueryConfig. The text is
either a bare Todoist filter or a YAML (or JSON) document, optionally wrapped
in a fenced code block. Failures are returned as QueryParseError values.
"""

import re
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from ..models.query import (
    DEFAULT_AUTOREFRESH,
    DEFAULT_GROUPING,
    DEFAULT_NAME,
    DEFAULT_SHOW,
    DEFAULT_SORTING,
    GroupingOption,
    MetadataOption,
    QueryConfig,
    QueryParseError,
    QueryParseResult,
    QueryParseSuccess,
    SortingOption,
)


VALID_KEYS = ["name", "filter", "autorefresh", "groupBy", "sorting", "show"]
KEY_ALIASES = {
    "group_by": "groupBy",
    "auto_refresh": "autorefresh",
}

YAML_FALLBACK_WARNING = "Unable to parse query as YAML or JSON. Treating content as Todoist filter."
INVALID_QUERY_HEADLINE = "Invalid query configuration"

# A language tag must sit alone on the fence line, except "todoist" which may be inline
_FENCE_PATTERN = re.compile(
    r"^```(?:[\w-]+[ \t]*\r?\n|todoist(?=\s))?(.*?)```",
    re.DOTALL | re.IGNORECASE,
)

_BOOL_TAG = "tag:yaml.org,2002:bool"
_TIMESTAMP_TAG = "tag:yaml.org,2002:timestamp"


class QueryLoader(yaml.SafeLoader):
    """
    SafeLoader with YAML 1.2 core scalar typing.

    Dates stay strings and only true/false are booleans, so values such as
    "2025-03-10" or "yes" reach the schema as Todoist filter text.
    """


QueryLoader.yaml_implicit_resolvers = {
    first: [(tag, regexp) for tag, regexp in resolvers if tag not in (_BOOL_TAG, _TIMESTAMP_TAG)]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}
QueryLoader.add_implicit_resolver(
    _BOOL_TAG,
    re.compile(r"^(?:true|True|TRUE|false|False|FALSE)$"),
    list("tTfF"),
)


class _QuerySchema(BaseModel):
    """Validation schema for structured queries."""

    model_config = ConfigDict(extra="ignore")

    name: str = DEFAULT_NAME
    filter: str
    autorefresh: int = DEFAULT_AUTOREFRESH
    group_by: GroupingOption = Field(default=DEFAULT_GROUPING, alias="groupBy")
    sorting: List[SortingOption] = Field(default_factory=lambda: list(DEFAULT_SORTING))
    show: List[MetadataOption] = Field(default_factory=lambda: list(DEFAULT_SHOW))

    @field_validator("filter")
    @classmethod
    def filter_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise PydanticCustomError("filter_empty", "filter must be a non-empty string")
        return value

    @field_validator("autorefresh")
    @classmethod
    def autorefresh_not_negative(cls, value: int) -> int:
        if value < 0:
            raise PydanticCustomError("autorefresh_negative", "autorefresh must be greater or equal to 0")
        return value

    @field_validator("show", mode="before")
    @classmethod
    def show_none_literal(cls, value: Any) -> Any:
        if value == "none":
            return []
        return value


def extract_query_source(raw: str) -> str:
    """
    Strip a fenced code block wrapper if present.

    Args:
        raw: The raw block text

    Returns:
        The fenced content, or the trimmed text when there is no fence
    """
    trimmed = raw.strip()
    if trimmed.startswith("```"):
        match = _FENCE_PATTERN.match(trimmed)
        if match and match.group(1).strip():
            return match.group(1).strip()
    return trimmed


def normalize_keys(data: Dict[Any, Any]) -> Dict[Any, Any]:
    """Map legacy snake_case aliases onto their canonical keys."""
    result: Dict[Any, Any] = {}
    for key, value in data.items():
        result[KEY_ALIASES.get(key, key)] = value
    return result


def gather_warnings(data: Dict[Any, Any]) -> List[str]:
    """Return one warning per unrecognized top-level key."""
    return [
        f"Unknown option '{key}' was ignored."
        for key in data
        if key not in VALID_KEYS
    ]


def dedupe_sorting(sorting: List[SortingOption]) -> List[SortingOption]:
    """
    Remove repeated sort rules, keeping first-seen order.

    Falls back to the default rule rather than returning an empty list.
    """
    seen = set()
    result = []
    for option in sorting:
        if option not in seen:
            seen.add(option)
            result.append(option)
    return result if result else list(DEFAULT_SORTING)


def format_validation_errors(error: ValidationError) -> List[str]:
    details = []
    for issue in error.errors():
        path = ".".join(str(part) for part in issue["loc"])
        details.append(f"{issue['msg']} ({path})" if path else issue["msg"])
    return details


def make_filter_only(filter_text: str, warnings: Optional[List[str]] = None) -> QueryParseSuccess:
    return QueryParseSuccess(
        config=QueryConfig(filter=filter_text.strip()),
        warnings=list(warnings or []),
    )


def parse_query(raw: str) -> QueryParseResult:
    """
    Parse raw block text into a query configuration.

    Args:
        raw: Block content, a bare filter or a YAML/JSON document

    Returns:
        QueryParseSuccess with the config and non-fatal warnings, or
        QueryParseError describing why the query was rejected
    """
    source = extract_query_source(raw)
    if not source:
        return QueryParseError(error="Query is empty")

    try:
        parsed = yaml.load(source, Loader=QueryLoader)
    except yaml.YAMLError:
        return make_filter_only(source, [YAML_FALLBACK_WARNING])

    if parsed is None:
        return QueryParseError(error="Query definition is empty")

    if isinstance(parsed, str):
        if not parsed.strip():
            return QueryParseError(error="Query filter must be a non-empty string")
        return make_filter_only(parsed)

    if not isinstance(parsed, dict):
        return QueryParseError(error="Query definition must be an object")

    normalized = normalize_keys(parsed)
    warnings = gather_warnings(normalized)

    try:
        data = _QuerySchema.model_validate(normalized)
    except ValidationError as e:
        return QueryParseError(
            error=INVALID_QUERY_HEADLINE,
            details=format_validation_errors(e),
        )

    config = QueryConfig(
        name=data.name,
        filter=data.filter,
        autorefresh=data.autorefresh,
        group_by=data.group_by,
        sorting=dedupe_sorting(data.sorting),
        show=set(data.show),
    )
    return QueryParseSuccess(config=config, warnings=warnings)
