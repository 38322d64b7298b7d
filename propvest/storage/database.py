# propvest/storage/database.py
import logging
from contextlib import contextmanager

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError

from propvest.core.database import Base, make_engine, make_session_factory
from propvest.core.exceptions import (
    InsufficientBalance,
    InternalInconsistency,
    NotFound,
    ValidationError,
)
from propvest.models import (
    AdminAuditLog,
    PaymentCard,
    Property,
    PropertyDocument,
    PropertyImage,
    User,
    UserProperty,
    WalletTransaction,
)
from propvest.storage.base import (
    ADMIN_USER_FIELDS,
    PROFILE_FIELDS,
    PROPERTY_FIELDS,
    Storage,
    pick,
    to_money,
    utcnow,
)
from propvest.storage.seed import SAMPLE_PROPERTIES

logger = logging.getLogger(__name__)


class DatabaseStorage(Storage):
    """SQLAlchemy-backed storage. Every public call runs in its own transaction."""

    def __init__(self, database_url: str = None, engine=None, echo: bool = False):
        if engine is None:
            engine = make_engine(database_url, echo=echo)
        self.engine = engine
        self.SessionLocal = make_session_factory(engine)
        Base.metadata.create_all(bind=engine)

    @contextmanager
    def session(self):
        db = self.SessionLocal()
        try:
            yield db
        except Exception:
            db.rollback()
            raise
        finally:
            db.close()

    def _add(self, row):
        with self.session() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return row

    # rounded in SQL so backends storing REAL (SQLite) stay on whole cents
    def _debit(self, db, user_id, amount):
        amount = to_money(amount)
        updated = db.query(User).filter(
            User.id == user_id,
            User.wallet_balance >= amount,
        ).update(
            {User.wallet_balance: func.round(User.wallet_balance - amount, 2)},
            synchronize_session=False,
        )
        if not updated:
            if db.query(User.id).filter(User.id == user_id).first() is None:
                raise NotFound("User not found")
            raise InsufficientBalance()

    def _credit(self, db, user_id, amount):
        amount = to_money(amount)
        updated = db.query(User).filter(User.id == user_id).update(
            {User.wallet_balance: func.round(User.wallet_balance + amount, 2)},
            synchronize_session=False,
        )
        if not updated:
            raise NotFound("User not found")

    # Users

    def get_user(self, user_id):
        with self.session() as db:
            return db.query(User).filter(User.id == user_id).first()

    def get_user_by_username(self, username):
        with self.session() as db:
            return db.query(User).filter(User.username == username).first()

    def create_user(self, data):
        values = self._user_values(data)
        with self.session() as db:
            if db.query(User.id).filter(User.username == values["username"]).first():
                raise ValidationError("Username already exists")

            user = User(**values)
            db.add(user)
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                raise ValidationError("Username already exists")
            db.refresh(user)
            return user

    def _update_user(self, user_id, data):
        with self.session() as db:
            user = db.query(User).filter(User.id == user_id).first()
            if not user:
                raise NotFound("User not found")
            for key, value in data.items():
                setattr(user, key, value)
            db.commit()
            db.refresh(user)
            return user

    def update_user_profile(self, user_id, data):
        return self._update_user(user_id, pick(data, PROFILE_FIELDS))

    def update_last_login(self, user_id):
        return self._update_user(user_id, {"last_login": utcnow()})

    # Properties

    def get_properties(self, filter_value):
        with self.session() as db:
            return db.query(Property).filter(
                Property.filter == filter_value
            ).order_by(Property.id).all()

    def get_property(self, property_id):
        with self.session() as db:
            return db.query(Property).filter(Property.id == property_id).first()

    def create_property(self, data):
        return self._add(Property(**self._property_values(data)))

    def initialize_properties(self):
        with self.session() as db:
            if db.query(Property.id).first() is not None:
                return
            for sample in SAMPLE_PROPERTIES:
                db.add(Property(**self._property_values(sample)))
            db.commit()
        logger.info("Seeded %d sample properties", len(SAMPLE_PROPERTIES))

    # Stakes

    def get_user_properties(self, user_id):
        with self.session() as db:
            rows = db.query(UserProperty, Property).outerjoin(
                Property, Property.id == UserProperty.property_id
            ).filter(
                UserProperty.user_id == user_id
            ).order_by(UserProperty.id).all()

        result = []
        for stake, prop in rows:
            if prop is None:
                raise InternalInconsistency(
                    f"Property with ID {stake.property_id} not found"
                )
            result.append((stake, prop))
        return result

    def add_user_property(self, data):
        return self._add(UserProperty(**self._stake_values(data)))

    # Wallet

    def get_user_wallet_balance(self, user_id):
        with self.session() as db:
            balance = db.query(User.wallet_balance).filter(User.id == user_id).first()
            if balance is None:
                raise NotFound("User not found")
            return balance[0]

    def update_wallet_balance(self, user_id, delta):
        with self.session() as db:
            self._credit(db, user_id, delta)
            db.commit()
            return db.query(User).filter(User.id == user_id).first()

    def add_wallet_transaction(self, data):
        return self._add(WalletTransaction(**self._transaction_values(data)))

    def get_wallet_transactions(self, user_id):
        with self.session() as db:
            return db.query(WalletTransaction).filter(
                WalletTransaction.user_id == user_id
            ).order_by(WalletTransaction.date.desc(), WalletTransaction.id.desc()).all()

    def record_wallet_movement(self, user_id, delta, transaction):
        delta = to_money(delta)
        values = self._transaction_values(dict(transaction, user_id=user_id, amount=delta))
        with self.session() as db:
            if delta < 0:
                self._debit(db, user_id, -delta)
            else:
                self._credit(db, user_id, delta)

            db.add(WalletTransaction(**values))
            db.commit()
            return db.query(User.wallet_balance).filter(User.id == user_id).scalar()

    def record_investment(self, stake, transaction):
        stake_values = self._stake_values(stake)
        amount = stake_values["investment_amount"]
        transaction_values = self._transaction_values(
            dict(
                transaction,
                user_id=stake_values["user_id"],
                amount=-amount,
                type="investment",
                related_property_id=stake_values["property_id"],
            )
        )
        with self.session() as db:
            self._debit(db, stake_values["user_id"], amount)

            record = UserProperty(**stake_values)
            db.add(record)
            db.add(WalletTransaction(**transaction_values))
            db.commit()
            db.refresh(record)
            return record

    # Payment cards

    def get_payment_cards(self, user_id):
        with self.session() as db:
            return db.query(PaymentCard).filter(
                PaymentCard.user_id == user_id
            ).order_by(PaymentCard.id).all()

    def get_payment_card(self, card_id):
        with self.session() as db:
            return db.query(PaymentCard).filter(PaymentCard.id == card_id).first()

    def add_payment_card(self, data):
        with self.session() as db:
            has_cards = db.query(PaymentCard.id).filter(
                PaymentCard.user_id == data["user_id"]
            ).first() is not None

            card = PaymentCard(**self._card_values(data, is_default=not has_cards))
            db.add(card)
            db.commit()
            db.refresh(card)
            return card

    def delete_payment_card(self, card_id):
        with self.session() as db:
            card = db.query(PaymentCard).filter(PaymentCard.id == card_id).first()
            if not card:
                return False

            was_default, user_id = card.is_default, card.user_id
            db.delete(card)
            db.flush()

            if was_default:
                replacement = db.query(PaymentCard).filter(
                    PaymentCard.user_id == user_id
                ).order_by(PaymentCard.id).first()
                if replacement:
                    replacement.is_default = True

            db.commit()
            return True

    def set_default_payment_card(self, card_id, user_id):
        with self.session() as db:
            card = db.query(PaymentCard).filter(
                PaymentCard.id == card_id,
                PaymentCard.user_id == user_id,
            ).first()
            if not card:
                raise NotFound("Payment card not found")

            db.query(PaymentCard).filter(PaymentCard.user_id == user_id).update(
                {PaymentCard.is_default: False}, synchronize_session=False
            )
            db.query(PaymentCard).filter(PaymentCard.id == card_id).update(
                {PaymentCard.is_default: True}, synchronize_session=False
            )
            db.commit()
            db.refresh(card)
            return card

    # Property media

    def get_property_images(self, property_id):
        with self.session() as db:
            return db.query(PropertyImage).filter(
                PropertyImage.property_id == property_id
            ).order_by(PropertyImage.display_order, PropertyImage.id).all()

    def get_property_image(self, image_id):
        with self.session() as db:
            return db.query(PropertyImage).filter(PropertyImage.id == image_id).first()

    def add_property_image(self, data):
        return self._add(PropertyImage(**self._image_values(data)))

    def delete_property_image(self, image_id):
        with self.session() as db:
            deleted = db.query(PropertyImage).filter(PropertyImage.id == image_id).delete()
            db.commit()
            return bool(deleted)

    def get_property_documents(self, property_id):
        with self.session() as db:
            return db.query(PropertyDocument).filter(
                PropertyDocument.property_id == property_id
            ).order_by(PropertyDocument.uploaded_at, PropertyDocument.id).all()

    def get_property_document(self, document_id):
        with self.session() as db:
            return db.query(PropertyDocument).filter(
                PropertyDocument.id == document_id
            ).first()

    def add_property_document(self, data):
        return self._add(PropertyDocument(**self._document_values(data)))

    def delete_property_document(self, document_id):
        with self.session() as db:
            deleted = db.query(PropertyDocument).filter(
                PropertyDocument.id == document_id
            ).delete()
            db.commit()
            return bool(deleted)

    # Admin

    def get_all_users(self):
        with self.session() as db:
            return db.query(User).order_by(User.id).all()

    def get_all_properties(self):
        with self.session() as db:
            return db.query(Property).order_by(Property.id).all()

    def get_all_transactions(self):
        with self.session() as db:
            return db.query(WalletTransaction).order_by(
                WalletTransaction.date.desc(), WalletTransaction.id.desc()
            ).all()

    def update_user_by_admin(self, user_id, data):
        return self._update_user(user_id, pick(data, ADMIN_USER_FIELDS))

    def update_property_by_admin(self, property_id, data):
        with self.session() as db:
            prop = db.query(Property).filter(Property.id == property_id).first()
            if not prop:
                raise NotFound("Property not found")
            for key, value in pick(data, PROPERTY_FIELDS).items():
                setattr(prop, key, value)
            prop.updated_at = utcnow()
            db.commit()
            db.refresh(prop)
            return prop

    def add_admin_audit_log(self, data):
        return self._add(AdminAuditLog(**self._audit_values(data)))

    def get_admin_audit_logs(self):
        with self.session() as db:
            return db.query(AdminAuditLog).order_by(
                AdminAuditLog.timestamp.desc(), AdminAuditLog.id.desc()
            ).all()
