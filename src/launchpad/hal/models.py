"""
HAL and HAL-FORMS models.

Used by the server adapters to describe templates and by the client to
parse responses. Reserved members (_links, _embedded, _templates) are
typed fields; everything else on a resource is a domain property.

See https://datatracker.ietf.org/doc/html/draft-kelly-json-hal-11 and
https://rwcbook.github.io/hal-forms/
"""

from typing import Any, Dict, List, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Serialized form of a HAL document as it crosses the wire
HalObject = Dict[str, Any]

RESERVED_KEYS = frozenset({"_links", "_embedded", "_templates"})

HTTP_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE", "HEAD", "OPTIONS"})


class HalLink(BaseModel):
    """A hyperlink to a related resource."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    href: str = Field(description="Absolute or root-relative URI")
    title: Optional[str] = Field(None, description="Human-readable title")
    type: Optional[str] = Field(None, description="Media type hint for the target")
    templated: Optional[bool] = Field(None, description="Whether href is a URI template")
    hreflang: Optional[str] = None
    name: Optional[str] = None
    deprecation: Optional[str] = None
    profile: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class PropertyOption(BaseModel):
    """One allowed value for a select/enum property."""

    value: Any
    prompt: Optional[str] = None


class HalTemplateProperty(BaseModel):
    """
    One input of a HAL-FORMS template.

    Whether ``value`` was supplied is tracked separately from its content,
    so an explicit ``None``/``0``/``False``/``""`` is still a value.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: str
    prompt: Optional[str] = None
    required: bool = False
    value: Any = None
    type: Optional[str] = None
    regex: Optional[str] = None
    min: Optional[Union[int, float, str]] = None
    max: Optional[Union[int, float, str]] = None
    min_length: Optional[int] = Field(None, alias="minLength")
    max_length: Optional[int] = Field(None, alias="maxLength")
    read_only: bool = Field(False, alias="readOnly")
    options: Optional[List[PropertyOption]] = None

    @property
    def has_value(self) -> bool:
        return "value" in self.model_fields_set

    @property
    def is_hidden(self) -> bool:
        return self.type == "hidden"

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class HalTemplate(BaseModel):
    """A named operation a resource supports (method, target, typed inputs)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    title: Optional[str] = None
    method: Optional[str] = None
    target: Optional[str] = None
    content_type: Optional[str] = Field(None, alias="contentType")
    properties: List[HalTemplateProperty] = Field(default_factory=list)

    @field_validator("properties", mode="before")
    @classmethod
    def missing_properties_are_empty(cls, value):
        return [] if value is None else value

    @model_validator(mode="after")
    def property_names_are_unique(self) -> "HalTemplate":
        seen = set()
        for prop in self.properties:
            if prop.name in seen:
                raise ValueError(f"Duplicate template property name: {prop.name}")
            seen.add(prop.name)
        return self

    @classmethod
    def coerce(cls, template: Union["HalTemplate", Mapping[str, Any]]) -> "HalTemplate":
        """Accept either a parsed template or its wire mapping."""
        if isinstance(template, cls):
            return template
        return cls.model_validate(template)

    @property
    def normalized_method(self) -> Optional[str]:
        """Uppercased method, or None when missing or unrecognized."""
        if not isinstance(self.method, str):
            return None
        method = self.method.upper()
        return method if method in HTTP_METHODS else None

    @property
    def visible_properties(self) -> List[HalTemplateProperty]:
        return [prop for prop in self.properties if not prop.is_hidden]

    def get_property(self, name: str) -> Optional[HalTemplateProperty]:
        for prop in self.properties:
            if prop.name == name:
                return prop
        return None

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


class HalResource(BaseModel):
    """
    A parsed HAL document.

    Domain properties are kept as extra members and read with mapping
    syntax: ``"label" in resource`` and ``resource["label"]``.
    """

    model_config = ConfigDict(extra="allow")

    links: Optional[Dict[str, Union[HalLink, List[HalLink]]]] = Field(None, alias="_links")
    embedded: Optional[Dict[str, Union["HalResource", List["HalResource"]]]] = Field(None, alias="_embedded")
    templates: Optional[Dict[str, HalTemplate]] = Field(None, alias="_templates")

    @property
    def properties(self) -> Dict[str, Any]:
        return dict(self.model_extra or {})

    def __contains__(self, key: object) -> bool:
        return key in (self.model_extra or {})

    def __getitem__(self, key: str) -> Any:
        return (self.model_extra or {})[key]

    def get(self, key: str, default: Any = None) -> Any:
        return (self.model_extra or {}).get(key, default)

    def to_dict(self) -> HalObject:
        return self.model_dump(by_alias=True, exclude_unset=True)


HalResource.model_rebuild()
