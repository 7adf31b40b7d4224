"""Turn stored link values into URLs a browser can open."""

from typing import Mapping, Optional

from projectshelf.models.project import LinkKind

DEFAULT_LINK_TEMPLATES = {
    LinkKind.URL.value: "https://admin.shopify.com/store/{value}/",
}


def resolve_link(
    kind: LinkKind | str, value: str, templates: Optional[Mapping[str, str]] = None
) -> str:
    """Build an openable URL from a link field value.

    Values that already have a scheme are returned unchanged. Otherwise the
    kind's template is applied when one is configured, and ``https://`` is
    prefixed as a last resort.
    """
    value = value.strip()
    if "://" in value or value.startswith("mailto:"):
        return value

    if templates is None:
        templates = DEFAULT_LINK_TEMPLATES

    template = templates.get(LinkKind(kind).value)
    if template:
        return template.format(value=value)

    return f"https://{value}"
