from typing import Any, TypeVar

import pydantic
from pydantic import BaseModel, ConfigDict, field_validator

from features.escaping.escaping_context import EscapingContext
from features.escaping.escaping_errors import InvalidContextOptionsError
from util import log


class EscapeOptions(BaseModel):
    """
    Typed view over the few context options an escaper reads. The option map itself is open:
    keys a model doesn't declare are ignored, so only values an escaper actually uses can fail.
    """

    model_config = ConfigDict(extra = "ignore", frozen = True)


class CodeBlockOptions(EscapeOptions):
    raw: bool = False
    within: bool = False
    use_fences: bool = False
    language: str = ""

    # noinspection PyNestedDecorators
    @field_validator("language", mode = "before")
    @classmethod
    def language_or_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class UrlOptions(EscapeOptions):
    encode_unicode: bool = False


OptionsT = TypeVar("OptionsT", bound = EscapeOptions)


def parse_options(options_class: type[OptionsT], context: EscapingContext) -> OptionsT:
    try:
        return options_class.model_validate(dict(context.options))
    except pydantic.ValidationError as e:
        message = log.w(f"Invalid options for context '{context.name}': {e.error_count()} error(s)")
        raise InvalidContextOptionsError(message) from e
