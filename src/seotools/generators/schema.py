"""JSON-LD schema markup generator.

Each supported schema.org type is a dataclass holding the form fields; its
``to_jsonld()`` maps those fields onto the schema.org structure.
"""

import json
from dataclasses import dataclass, fields as dataclass_fields
from typing import Dict, List, Type

from seotools.constants import SCHEMA_CONTEXT


@dataclass
class SchemaObject:
    """Base for the supported schema types."""

    schema_type = "Thing"

    def _base(self) -> dict:
        return {"@context": SCHEMA_CONTEXT, "@type": self.schema_type}

    def to_jsonld(self) -> dict:
        return self._base()

    def to_json(self) -> str:
        return json.dumps(self.to_jsonld(), indent=2, ensure_ascii=False)

    def to_script_tag(self) -> str:
        return f'<script type="application/ld+json">\n{self.to_json()}\n</script>'


@dataclass
class OrganizationSchema(SchemaObject):
    schema_type = "Organization"

    name: str = ""
    url: str = ""
    logo: str = ""
    description: str = ""
    social_links: str = ""  # one URL per line

    def to_jsonld(self) -> dict:
        return {
            **self._base(),
            "name": self.name,
            "url": self.url,
            "logo": self.logo,
            "description": self.description,
            "sameAs": [line.strip() for line in self.social_links.splitlines() if line.strip()],
        }


@dataclass
class LocalBusinessSchema(SchemaObject):
    schema_type = "LocalBusiness"

    name: str = ""
    url: str = ""
    phone: str = ""
    street: str = ""
    city: str = ""
    state: str = ""
    zip: str = ""
    country: str = ""

    def to_jsonld(self) -> dict:
        return {
            **self._base(),
            "name": self.name,
            "url": self.url,
            "telephone": self.phone,
            "address": {
                "@type": "PostalAddress",
                "streetAddress": self.street,
                "addressLocality": self.city,
                "addressRegion": self.state,
                "postalCode": self.zip,
                "addressCountry": self.country,
            },
        }


@dataclass
class ArticleSchema(SchemaObject):
    schema_type = "Article"

    headline: str = ""
    author: str = ""
    date_published: str = ""
    date_modified: str = ""
    image: str = ""
    publisher_name: str = ""
    publisher_logo: str = ""

    def to_jsonld(self) -> dict:
        return {
            **self._base(),
            "headline": self.headline,
            "author": {"@type": "Person", "name": self.author},
            "datePublished": self.date_published,
            "dateModified": self.date_modified,
            "image": self.image,
            "publisher": {
                "@type": "Organization",
                "name": self.publisher_name,
                "logo": {"@type": "ImageObject", "url": self.publisher_logo},
            },
        }


@dataclass
class ProductSchema(SchemaObject):
    schema_type = "Product"

    name: str = ""
    description: str = ""
    image: str = ""
    brand: str = ""
    price: str = ""
    currency: str = "USD"
    availability: str = "https://schema.org/InStock"

    def to_jsonld(self) -> dict:
        return {
            **self._base(),
            "name": self.name,
            "description": self.description,
            "image": self.image,
            "brand": {"@type": "Brand", "name": self.brand},
            "offers": {
                "@type": "Offer",
                "price": self.price,
                "priceCurrency": self.currency or "USD",
                "availability": self.availability or "https://schema.org/InStock",
            },
        }


@dataclass
class FAQSchema(SchemaObject):
    """FAQ page. ``faqs`` holds blank-line separated blocks: question line, then answer."""

    schema_type = "FAQPage"

    faqs: str = ""

    def questions(self) -> List[dict]:
        items = []
        for block in self.faqs.replace('\r\n', '\n').split('\n\n'):
            lines = [line.strip() for line in block.strip().split('\n')]
            if not lines or not lines[0]:
                continue
            items.append({
                "@type": "Question",
                "name": lines[0],
                "acceptedAnswer": {
                    "@type": "Answer",
                    "text": " ".join(line for line in lines[1:] if line),
                },
            })
        return items

    def to_jsonld(self) -> dict:
        return {**self._base(), "mainEntity": self.questions()}


@dataclass
class BreadcrumbListSchema(SchemaObject):
    """Breadcrumb trail. ``breadcrumbs`` holds one ``name|url`` pair per line."""

    schema_type = "BreadcrumbList"

    breadcrumbs: str = ""

    def items(self) -> List[dict]:
        items = []
        for line in self.breadcrumbs.splitlines():
            if not line.strip():
                continue
            name, _, url = line.partition('|')
            items.append({
                "@type": "ListItem",
                "position": len(items) + 1,
                "name": name.strip(),
                "item": url.strip(),
            })
        return items

    def to_jsonld(self) -> dict:
        return {**self._base(), "itemListElement": self.items()}


SCHEMA_TYPES: Dict[str, Type[SchemaObject]] = {
    "Organization": OrganizationSchema,
    "LocalBusiness": LocalBusinessSchema,
    "Article": ArticleSchema,
    "Product": ProductSchema,
    "FAQ": FAQSchema,
    "BreadcrumbList": BreadcrumbListSchema,
}


def build_schema(schema_type: str, **fields) -> SchemaObject:
    """Create a schema object from a type name and its form fields.

    Raises:
        ValueError: If the type is not supported or a field is unknown for it
    """
    try:
        schema_class = SCHEMA_TYPES[schema_type]
    except KeyError:
        raise ValueError(
            f"Unsupported schema type {schema_type!r}; choose from {', '.join(SCHEMA_TYPES)}"
        ) from None

    known = {f.name for f in dataclass_fields(schema_class)}
    unknown = sorted(set(fields) - known)
    if unknown:
        raise ValueError(f"Unknown {schema_type} fields: {', '.join(unknown)}")
    return schema_class(**fields)
