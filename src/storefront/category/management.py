"""Category management: admin commands, their handler, and lookups."""

from protean import Q, current_domain, handle
from protean.fields import Identifier, String, Text

from storefront.category.category import Category
from storefront.domain import logger, storefront
from storefront.product.product import Product
from storefront.shared.clock import utcnow
from storefront.shared.errors import ConflictError, NotFound


@storefront.command(part_of="Category")
class CreateCategory:
    name: String(required=True, max_length=100)
    slug: String(required=True, max_length=100)
    description: Text()
    image_url: String(max_length=500)
    parent_id: Identifier()


@storefront.command(part_of="Category")
class DeleteCategory:
    category_id: Identifier(required=True)


@storefront.command_handler(part_of=Category)
class ManageCategoryHandler:
    @handle(CreateCategory)
    def create_category(self, command):
        repo = current_domain.repository_for(Category)

        if command.parent_id and repo.get_or_none(command.parent_id) is None:
            raise NotFound(f"Category {command.parent_id} does not exist")
        if repo.query.filter(slug=command.slug).count():
            raise ConflictError(f"A category with slug '{command.slug}' already exists")

        category = Category.create(
            name=command.name,
            slug=command.slug,
            description=command.description,
            image_url=command.image_url,
            parent_id=command.parent_id,
        )
        repo.add(category)

        logger.info("category_created", category_id=str(category.id), slug=category.slug)
        return str(category.id)

    @handle(DeleteCategory)
    def delete_category(self, command):
        """Delete a category. Products keep their slug text and lose the reference."""
        products = current_domain.repository_for(Product)._dao
        detached = products._update_all(
            Q(category_id=command.category_id),
            category_id=None,
            updated_at=utcnow(),
            _version=products.database_model_cls._version + 1,
        )
        current_domain.repository_for(Category)._dao._delete_all(Q(id=command.category_id))

        logger.info("category_deleted", category_id=command.category_id, products_detached=detached)


def get_category(slug):
    category = current_domain.repository_for(Category).query.filter(slug=slug).first
    if category is None:
        raise NotFound(f"Category '{slug}' not found")
    return category


def list_categories(limit=None):
    """All categories in name order."""
    return current_domain.repository_for(Category).query.order_by(["name", "created_at"]).limit(limit).all().items
