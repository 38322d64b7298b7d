# propvest/storage/memory.py
import itertools
import logging
import threading

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


def newest_first(rows, attr):
    return sorted(rows, key=lambda row: (getattr(row, attr), row.id), reverse=True)


class MemStorage(Storage):
    """Map-backed storage; one process-local lock serializes every mutation."""

    def __init__(self):
        self._lock = threading.RLock()

        self.users = {}
        self.properties = {}
        self.user_properties = {}
        self.wallet_transactions = {}
        self.payment_cards = {}
        self.property_images = {}
        self.property_documents = {}
        self.audit_logs = {}

        self._ids = {}

    def _next_id(self, table):
        if table not in self._ids:
            self._ids[table] = itertools.count(1)
        return next(self._ids[table])

    def _require_user(self, user_id):
        user = self.users.get(user_id)
        if not user:
            raise NotFound("User not found")
        return user

    # Users

    def get_user(self, user_id):
        return self.users.get(user_id)

    def get_user_by_username(self, username):
        with self._lock:
            return next(
                (user for user in self.users.values() if user.username == username),
                None,
            )

    def create_user(self, data):
        values = self._user_values(data)
        with self._lock:
            if self.get_user_by_username(values["username"]):
                raise ValidationError("Username already exists")
            user = User(id=self._next_id("users"), **values)
            self.users[user.id] = user
        return user

    def update_user_profile(self, user_id, data):
        with self._lock:
            user = self._require_user(user_id)
            for key, value in pick(data, PROFILE_FIELDS).items():
                setattr(user, key, value)
        return user

    def update_last_login(self, user_id):
        with self._lock:
            user = self._require_user(user_id)
            user.last_login = utcnow()
        return user

    # Properties

    def get_properties(self, filter_value):
        with self._lock:
            return [p for p in self.properties.values() if p.filter == filter_value]

    def get_property(self, property_id):
        return self.properties.get(property_id)

    def create_property(self, data):
        values = self._property_values(data)
        with self._lock:
            prop = Property(id=self._next_id("properties"), **values)
            self.properties[prop.id] = prop
        return prop

    def initialize_properties(self):
        with self._lock:
            if self.properties:
                return
            for sample in SAMPLE_PROPERTIES:
                self.create_property(dict(sample))
        logger.info("Seeded %d sample properties", len(SAMPLE_PROPERTIES))

    # Stakes

    def get_user_properties(self, user_id):
        with self._lock:
            stakes = [s for s in self.user_properties.values() if s.user_id == user_id]

            result = []
            for stake in stakes:
                prop = self.properties.get(stake.property_id)
                if not prop:
                    raise InternalInconsistency(
                        f"Property with ID {stake.property_id} not found"
                    )
                result.append((stake, prop))
            return result

    def _insert_stake(self, values):
        with self._lock:
            stake = UserProperty(id=self._next_id("user_properties"), **values)
            self.user_properties[stake.id] = stake
        return stake

    def add_user_property(self, data):
        return self._insert_stake(self._stake_values(data))

    # Wallet

    def get_user_wallet_balance(self, user_id):
        return self._require_user(user_id).wallet_balance

    def update_wallet_balance(self, user_id, delta):
        with self._lock:
            user = self._require_user(user_id)
            user.wallet_balance += to_money(delta)
        return user

    def add_wallet_transaction(self, data):
        return self._insert_transaction(self._transaction_values(data))

    def _insert_transaction(self, values):
        with self._lock:
            transaction = WalletTransaction(
                id=self._next_id("wallet_transactions"), **values
            )
            self.wallet_transactions[transaction.id] = transaction
        return transaction

    def get_wallet_transactions(self, user_id):
        with self._lock:
            return newest_first(
                [t for t in self.wallet_transactions.values() if t.user_id == user_id],
                "date",
            )

    def record_wallet_movement(self, user_id, delta, transaction):
        delta = to_money(delta)
        with self._lock:
            user = self._require_user(user_id)
            if delta < 0 and user.wallet_balance < -delta:
                raise InsufficientBalance()

            values = self._transaction_values(dict(transaction, user_id=user_id, amount=delta))
            user.wallet_balance += delta
            self._insert_transaction(values)
            return user.wallet_balance

    def record_investment(self, stake, transaction):
        stake_values = self._stake_values(stake)
        amount = stake_values["investment_amount"]
        with self._lock:
            user = self._require_user(stake_values["user_id"])
            if user.wallet_balance < amount:
                raise InsufficientBalance()

            transaction_values = self._transaction_values(
                dict(
                    transaction,
                    user_id=user.id,
                    amount=-amount,
                    type="investment",
                    related_property_id=stake_values["property_id"],
                )
            )
            user.wallet_balance -= amount
            record = self._insert_stake(stake_values)
            self._insert_transaction(transaction_values)
            return record

    # Payment cards

    def get_payment_cards(self, user_id):
        with self._lock:
            return [c for c in self.payment_cards.values() if c.user_id == user_id]

    def get_payment_card(self, card_id):
        return self.payment_cards.get(card_id)

    def add_payment_card(self, data):
        with self._lock:
            is_first = not self.get_payment_cards(data["user_id"])
            card = PaymentCard(
                id=self._next_id("payment_cards"),
                **self._card_values(data, is_default=is_first),
            )
            self.payment_cards[card.id] = card
        return card

    def delete_payment_card(self, card_id):
        with self._lock:
            card = self.payment_cards.pop(card_id, None)
            if not card:
                return False

            if card.is_default:
                remaining = self.get_payment_cards(card.user_id)
                if remaining:
                    remaining[0].is_default = True
            return True

    def set_default_payment_card(self, card_id, user_id):
        with self._lock:
            card = self.payment_cards.get(card_id)
            if not card or card.user_id != user_id:
                raise NotFound("Payment card not found")

            for other in self.get_payment_cards(user_id):
                other.is_default = False
            card.is_default = True
        return card

    # Property media

    def get_property_images(self, property_id):
        with self._lock:
            images = [
                i for i in self.property_images.values() if i.property_id == property_id
            ]
        return sorted(images, key=lambda image: (image.display_order, image.id))

    def get_property_image(self, image_id):
        return self.property_images.get(image_id)

    def add_property_image(self, data):
        values = self._image_values(data)
        with self._lock:
            image = PropertyImage(id=self._next_id("property_images"), **values)
            self.property_images[image.id] = image
        return image

    def delete_property_image(self, image_id):
        with self._lock:
            return self.property_images.pop(image_id, None) is not None

    def get_property_documents(self, property_id):
        with self._lock:
            documents = [
                d for d in self.property_documents.values() if d.property_id == property_id
            ]
        return sorted(documents, key=lambda doc: (doc.uploaded_at, doc.id))

    def get_property_document(self, document_id):
        return self.property_documents.get(document_id)

    def add_property_document(self, data):
        values = self._document_values(data)
        with self._lock:
            document = PropertyDocument(id=self._next_id("property_documents"), **values)
            self.property_documents[document.id] = document
        return document

    def delete_property_document(self, document_id):
        with self._lock:
            return self.property_documents.pop(document_id, None) is not None

    # Admin

    def get_all_users(self):
        with self._lock:
            return list(self.users.values())

    def get_all_properties(self):
        with self._lock:
            return list(self.properties.values())

    def get_all_transactions(self):
        with self._lock:
            return newest_first(self.wallet_transactions.values(), "date")

    def update_user_by_admin(self, user_id, data):
        with self._lock:
            user = self._require_user(user_id)
            for key, value in pick(data, ADMIN_USER_FIELDS).items():
                setattr(user, key, value)
        return user

    def update_property_by_admin(self, property_id, data):
        with self._lock:
            prop = self.properties.get(property_id)
            if not prop:
                raise NotFound("Property not found")
            for key, value in pick(data, PROPERTY_FIELDS).items():
                setattr(prop, key, value)
            prop.updated_at = utcnow()
        return prop

    def add_admin_audit_log(self, data):
        values = self._audit_values(data)
        with self._lock:
            entry = AdminAuditLog(id=self._next_id("audit_logs"), **values)
            self.audit_logs[entry.id] = entry
        return entry

    def get_admin_audit_logs(self):
        with self._lock:
            return newest_first(self.audit_logs.values(), "timestamp")
