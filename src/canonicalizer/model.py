# src/canonicalizer/model.py
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CleaningRule(BaseModel):
    """
    Fields shared by element and attribute rules.
    Keys use the camelCase names of the JSON clean config; snake_case is accepted too.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)

    selector: Optional[str] = None
    contains: Optional[str] = None
    contains_regex: Optional[str] = Field(default=None, alias="containsRegex")
    contains_regex_flags: Optional[str] = Field(default=None, alias="containsRegexFlags")
    remove: Optional[bool] = None
    empty: Optional[bool] = None
    replacement: Optional[str] = None

    def to_json(self) -> str:
        """Serializes the rule back into its clean config form."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


class ElementRule(CleaningRule):
    """
    Removes or empties every element matched by `selector`.

    Without an explicit `remove` or `empty`, matched elements are emptied.
    `remove` wins over `empty` when both are set.
    """

    @property
    def should_remove(self) -> bool:
        return bool(self.remove)

    @property
    def should_empty(self) -> bool:
        if self.empty is None and self.remove is None:
            return True
        return bool(self.empty)


class AttributeRule(CleaningRule):
    """
    Removes or empties `attribute` on every element matched by `selector`
    (all elements when no selector is given).

    Without an explicit `remove` or `empty`, matched attributes are removed.
    `empty` wins over `remove` when both are set.
    """
    attribute: Optional[str] = None

    @property
    def effective_selector(self) -> str:
        return self.selector or "*"

    @property
    def should_empty(self) -> bool:
        return bool(self.empty)

    @property
    def should_remove(self) -> bool:
        if self.remove is None and self.empty is None:
            return True
        return bool(self.remove)


class CleaningConfiguration(BaseModel):
    """The declarative clean config: element rules first, then attribute rules."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    elements: List[ElementRule] = Field(default_factory=list)
    attributes: List[AttributeRule] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.elements and not self.attributes


class MinifyOptions(BaseModel):
    remove_comments: bool = True
    collapse_whitespace: bool = True
    decode_entities: bool = True
    collapse_inline_tag_whitespace: bool = True


class PrettyPrintOptions(BaseModel):
    indent_size: int = 1
    content_unformatted: List[str] = Field(default_factory=lambda: ["script", "pre"])


class CanonicalizeOptions(BaseModel):
    reorder_head_tags: bool = False
    tidy_on_bad_html: bool = False
    clean_config: CleaningConfiguration = Field(default_factory=CleaningConfiguration)
    minify: MinifyOptions = Field(default_factory=MinifyOptions)
    pretty_print: PrettyPrintOptions = Field(default_factory=PrettyPrintOptions)
