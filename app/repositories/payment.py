from sqlalchemy.orm import Session

from app.db.models.payment import Payment as PaymentModel


def add_payment(db: Session, **fields) -> PaymentModel:
    """Stage a payment in the current transaction. The caller commits."""
    payment = PaymentModel(**fields)
    db.add(payment)
    return payment


def get_payments_by_user_id(db: Session, user_id: int) -> list[PaymentModel]:
    return (
        db.query(PaymentModel)
        .filter(PaymentModel.user_id == user_id)
        .order_by(PaymentModel.payment_date.desc())
        .all()
    )
