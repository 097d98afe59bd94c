from .controller import ModerationController, count_successes
from .refresh import RefreshAfterWrite

__all__ = ["ModerationController", "RefreshAfterWrite", "count_successes"]
