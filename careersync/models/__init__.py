from careersync.models.db_models import AIConversation, Application, Job, ResumeAnalysis, User, WishlistItem

__all__ = ["AIConversation", "Application", "Job", "ResumeAnalysis", "User", "WishlistItem"]
