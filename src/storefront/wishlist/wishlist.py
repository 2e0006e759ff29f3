"""Wishlist entries: set membership of products per user."""

from uuid import uuid4

from protean import Index, Q
from protean.fields import DateTime, Identifier

from storefront.domain import storefront
from storefront.shared.clock import utcnow
from storefront.utils.db import dialect_insert


@storefront.aggregate(indexes=[Index("user_id", "product_id", unique=True)])
class WishlistEntry:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    created_at = DateTime(default=utcnow)


@storefront.repository(part_of=WishlistEntry)
class WishlistEntryRepository:
    def add_unless_present(self, user_id, product_id):
        """Insert the entry unless present; returns ``True`` when a row was written."""
        dao = self._dao
        table = dao.database_model_cls.__table__
        session = dao._get_session()

        stmt = (
            dialect_insert(session, table)
            .values(id=str(uuid4()), user_id=user_id, product_id=product_id, created_at=utcnow(), _version=0)
            .on_conflict_do_nothing(index_elements=["user_id", "product_id"])
        )
        return session.execute(stmt).rowcount > 0

    def remove(self, user_id, product_id):
        return self._dao._delete_all(Q(user_id=user_id, product_id=product_id)) > 0

    def contains(self, user_id, product_id):
        return self.query.filter(user_id=user_id, product_id=product_id).count() > 0

    def entries_for(self, user_id):
        """Newest first."""
        return self.query.filter(user_id=user_id).order_by("-created_at").limit(None).all().items
