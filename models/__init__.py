from flask_sqlalchemy import SQLAlchemy

# Initialize SQLAlchemy
db = SQLAlchemy()

# Import models
from models.children import Child
from models.badges import Badge
from models.badge_progress import ChildBadgeProgress
from models.child_badges import ChildBadgeAward
from models.notifications import Notification
