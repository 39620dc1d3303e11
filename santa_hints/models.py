from datetime import datetime
from flask_login import UserMixin
from .extensions import db, login_manager

HINT_MAX_LENGTH = 500


class Participant(db.Model):
    __tablename__ = "participants"
    # Never hand a deleted participant's id to a new one.
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    # Roster names are display only; the code is what identifies a participant.
    name = db.Column(db.String(64), nullable=False)
    code = db.Column(db.String(16), unique=True, nullable=False, index=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False)

    # --- Assignment ---
    gives_to_id = db.Column(db.Integer, db.ForeignKey("participants.id", ondelete="SET NULL"), nullable=True)
    gives_to = db.relationship(
        "Participant",
        remote_side=[id],
        foreign_keys=[gives_to_id],
        uselist=False,
        post_update=True,
    )

    # --- Hints left by this participant for their recipient ---
    hint1 = db.Column(db.String(HINT_MAX_LENGTH), nullable=True)
    hint2 = db.Column(db.String(HINT_MAX_LENGTH), nullable=True)
    hint3 = db.Column(db.String(HINT_MAX_LENGTH), nullable=True)


class AdminUser(UserMixin):
    """
    The single organizer account. It has no row of its own; the password is
    checked against ADMIN_PASS_HASH and Flask-Login only remembers the id.
    """
    id = "admin"


ADMIN = AdminUser()


@login_manager.user_loader
def load_user(user_id: str):
    if user_id == ADMIN.id:
        return ADMIN
    return None
