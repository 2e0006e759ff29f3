"""Category aggregate: a named grouping of products, addressable by its slug."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Identifier, String, Text

from storefront.domain import storefront
from storefront.shared.clock import utcnow

_SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


@storefront.aggregate
class Category:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=100, unique=True)
    description: Text()
    image_url: String(max_length=500)
    parent_id: Identifier()
    created_at: DateTime(default=utcnow)

    @invariant.post
    def slug_must_be_url_safe(self):
        if not self.slug or not _SLUG_PATTERN.match(self.slug):
            raise ValidationError(
                {"slug": ["Slug must contain only lowercase alphanumeric characters and single hyphens"]}
            )

    @classmethod
    def create(cls, name, slug, description=None, image_url=None, parent_id=None):
        if name is None or not str(name).strip():
            raise ValidationError({"name": ["Category name is required"]})
        return cls(
            name=str(name).strip(),
            slug=slug,
            description=description,
            image_url=image_url,
            parent_id=parent_id,
        )
