from enum import Enum


class ProjectStatus(str, Enum):
    """Moderation status of a project listing"""
    draft = "draft"
    submitted = "submitted"
    pending = "pending"
    under_review = "under_review"
    pending_update = "pending_update"
    approved = "approved"
    rejected = "rejected"
    funded = "funded"
    completed = "completed"


class ProjectStage(str, Enum):
    idea = "idea"
    prototype = "prototype"
    mvp = "mvp"
    early_revenue = "early_revenue"
    established = "established"


class ProjectAction(str, Enum):
    """Admin or owner actions that drive the project state machine"""
    submit = "submit"
    start_review = "start_review"
    approve = "approve"
    reject = "reject"
    delist = "delist"


class UserRole(str, Enum):
    project_owner = "project_owner"
    investor = "investor"
    admin = "admin"


class ApprovalStatus(str, Enum):
    """Account approval status of a user"""
    pending = "pending"
    approved = "approved"
    rejected = "rejected"


class UserAction(str, Enum):
    approve = "approve"
    reject = "reject"


class NotificationKind(str, Enum):
    """Kind of notification email queued by a moderation action"""
    user_welcome = "user_welcome"
    user_rejection = "user_rejection"
    project_approved = "project_approved"
    project_rejected = "project_rejected"


class NotificationJobStatus(str, Enum):
    pending = "pending"
    processing = "processing"
    sent = "sent"
    failed = "failed"
