"""Shopping cart lines and their repository.

A cart is the set of lines a user holds, one line per (user, product). Adds
are a single upsert keyed on that pair, so two concurrent adds of the same
product sum their quantities instead of one overwriting the other.
"""

from uuid import uuid4

from protean import Index, Q
from protean.fields import DateTime, Identifier, Integer

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.shared.money import Quantity
from storefront.utils.db import dialect_insert


@storefront.aggregate(indexes=[Index("user_id", "product_id", unique=True)])
class CartLine:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1)
    added_at = DateTime(default=utcnow)
    updated_at = DateTime(default=utcnow)

    def change_quantity(self, quantity):
        """Set the quantity exactly; below one is rejected, never treated as removal."""
        self.quantity = Quantity.of(quantity).value
        self.updated_at = utcnow()


@storefront.repository(part_of=CartLine)
class CartLineRepository:
    def add_or_increment(self, user_id, product_id, quantity):
        """Insert the line or add ``quantity`` to the existing one, atomically.

        Returns ``(line_id, quantity)`` as stored after the write.
        """
        dao = self._dao
        table = dao.database_model_cls.__table__
        now = utcnow()

        stmt = dialect_insert(dao._get_session(), table).values(
            id=str(uuid4()),
            user_id=user_id,
            product_id=product_id,
            quantity=quantity,
            added_at=now,
            updated_at=now,
            _version=0,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=["user_id", "product_id"],
            set_={
                "quantity": table.c.quantity + stmt.excluded.quantity,
                "updated_at": stmt.excluded.updated_at,
                "_version": table.c._version + 1,
            },
        ).returning(table.c.id, table.c.quantity)

        line_id, stored_quantity = dao._get_session().execute(stmt).one()
        return line_id, stored_quantity

    def lines_for(self, user_id):
        """The user's lines in insertion order."""
        return self.query.filter(user_id=user_id).order_by("added_at").limit(None).all().items

    def line_of(self, user_id, line_id):
        return self.query.filter(id=line_id, user_id=user_id).first

    def line_for_product(self, user_id, product_id):
        return self.query.filter(user_id=user_id, product_id=product_id).first

    def remove(self, user_id, line_id):
        return self._dao._delete_all(Q(id=line_id, user_id=user_id)) > 0

    def remove_all(self, user_id):
        return self._dao._delete_all(Q(user_id=user_id))

    def remove_exact(self, lines):
        """Delete ``lines`` only if none changed since they were read.

        Returns the number of lines deleted; a short count means a concurrent
        mutation touched one of them.
        """
        deleted = 0
        for line in lines:
            deleted += self._dao._delete_all(Q(id=line.id, user_id=line.user_id, quantity=line.quantity))
        return deleted
