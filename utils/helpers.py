from models import db
from models.notifications import ACHIEVEMENT_UNLOCKED, Notification


def format_amount(value):
    """Render a measure for humans: whole numbers without decimals."""
    if value is None:
        return "0"
    if value == int(value):
        return str(int(value))
    return f"{value:.2f}"


def create_child_notification(child_id, title, message, notification_type="message", data=None):
    notification = Notification(
        child_id=child_id,
        title=title,
        message=message,
        type=notification_type,
        data=data
    )
    db.session.add(notification)
    db.session.flush()
    return notification


def create_achievement_notification(child_id, definition):
    """Queue the "achievement unlocked" request for the notification service."""
    return create_child_notification(
        child_id,
        title="Achievement Unlocked!",
        message=f"You earned the {definition.name} badge (+{definition.points} points)",
        notification_type=ACHIEVEMENT_UNLOCKED,
        data={
            "badge_code": definition.code,
            "badge_name": definition.name,
            "points": definition.points,
            "rarity": definition.rarity.label,
        },
    )


def get_child_notifications(child_id, unread_only=False):
    query = Notification.query.filter_by(child_id=child_id)
    if unread_only:
        query = query.filter_by(is_read=False)
    notifications = query.order_by(Notification.created_at.desc(), Notification.id.desc()).all()
    return [notification.to_dict() for notification in notifications]


def mark_notification_as_read(notification_id):
    notification = db.session.get(Notification, notification_id)
    if notification and not notification.is_read:
        notification.is_read = True
        db.session.commit()
        return True
    return False
