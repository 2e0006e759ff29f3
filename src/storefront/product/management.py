"""Product administration: create, edit and delete catalogue entries."""

from protean import Q, current_domain, handle
from protean.fields import Boolean, Dict, Identifier, Integer, String, Text
from protean.fields import Decimal as DecimalField

from storefront.cart.cart import CartLine
from storefront.category.category import Category
from storefront.domain import logger, storefront
from storefront.product.product import Product
from storefront.review.review import Review
from storefront.shared.errors import NotFound
from storefront.wishlist.wishlist import WishlistEntry


@storefront.command(part_of="Product")
class CreateProduct:
    name: String(required=True, max_length=255)
    price: DecimalField(required=True)
    description: Text()
    stock_quantity: Integer(default=0)
    category: String(max_length=100)
    category_id: Identifier()
    featured: Boolean(default=False)
    image_url: String(max_length=500)


@storefront.command(part_of="Product")
class UpdateProduct:
    product_id: Identifier(required=True)
    changes: Dict()


@storefront.command(part_of="Product")
class DeleteProduct:
    product_id: Identifier(required=True)


def _category_slug(category_id):
    category = current_domain.repository_for(Category).get_or_none(category_id)
    if category is None:
        raise NotFound(f"Category {category_id} does not exist")
    return category.slug


@storefront.command_handler(part_of=Product)
class ManageProductHandler:
    @handle(CreateProduct)
    def create_product(self, command):
        category = command.category
        if command.category_id:
            category = _category_slug(command.category_id)

        product = Product.create(
            name=command.name,
            price=command.price,
            description=command.description,
            stock_quantity=command.stock_quantity,
            category=category,
            category_id=command.category_id,
            featured=command.featured,
            image_url=command.image_url,
        )
        current_domain.repository_for(Product).add(product)

        logger.info("product_created", product_id=str(product.id), price=str(product.price))
        return str(product.id)

    @handle(UpdateProduct)
    def update_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_or_none(command.product_id)
        if product is None:
            raise NotFound(f"Product {command.product_id} not found")

        changes = dict(command.changes or {})
        if changes.get("category_id"):
            changes.setdefault("category", _category_slug(changes["category_id"]))

        product.update_details(**changes)
        repo.add(product)

        logger.info("product_updated", product_id=command.product_id, fields=sorted(changes))
        return str(product.id)

    @handle(DeleteProduct)
    def delete_product(self, command):
        """Delete a product.

        Cart lines, wishlist entries and reviews referencing it go with it;
        order lines keep their snapshot of the product id and price.
        """
        product_id = command.product_id
        for dependent in (CartLine, WishlistEntry, Review):
            current_domain.repository_for(dependent)._dao._delete_all(Q(product_id=product_id))

        deleted = current_domain.repository_for(Product)._dao._delete_all(Q(id=product_id))
        if not deleted:
            raise NotFound(f"Product {product_id} not found")

        logger.info("product_deleted", product_id=product_id)
