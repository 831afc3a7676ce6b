"""
API Services Layer.

Database operations behind the HTTP endpoints. Each function takes the
request's session and any collaborators explicitly.
"""

from api.services.pipeline import (
    transition_status,
    get_status_history,
)

from api.services.applications import (
    create_application,
    check_duplicate,
    get_application,
    list_applications,
    list_board_applications,
    reanalyze_application,
)

from api.services.tags import (
    TAG_COLOR_PALETTE,
    DEFAULT_TAG_COLOR,
    create_tag,
    update_tag,
    list_tags,
    delete_tag,
    attach_tag,
    detach_tag,
    get_application_tags,
)

from api.services.shortlists import (
    create_shortlist,
    update_shortlist,
    list_shortlists,
    delete_shortlist,
    get_shortlist,
    add_to_shortlist,
    remove_from_shortlist,
    get_shortlist_items,
    get_application_shortlists,
)

from api.services.ratings import (
    get_rating,
    rate_application,
    get_application_ratings,
    delete_rating,
)

from api.services.jobs import (
    create_job,
    get_job,
    list_jobs,
    update_job,
)

from api.services.notifications import (
    Notifier,
    CeleryNotifier,
    NullNotifier,
)

__all__ = [
    # Pipeline
    "transition_status",
    "get_status_history",
    # Applications
    "create_application",
    "check_duplicate",
    "get_application",
    "list_applications",
    "list_board_applications",
    "reanalyze_application",
    # Tags
    "TAG_COLOR_PALETTE",
    "DEFAULT_TAG_COLOR",
    "create_tag",
    "update_tag",
    "list_tags",
    "delete_tag",
    "attach_tag",
    "detach_tag",
    "get_application_tags",
    # Shortlists
    "create_shortlist",
    "update_shortlist",
    "list_shortlists",
    "delete_shortlist",
    "get_shortlist",
    "add_to_shortlist",
    "remove_from_shortlist",
    "get_shortlist_items",
    "get_application_shortlists",
    # Ratings
    "get_rating",
    "rate_application",
    "get_application_ratings",
    "delete_rating",
    # Jobs
    "create_job",
    "get_job",
    "list_jobs",
    "update_job",
    # Notifications
    "Notifier",
    "CeleryNotifier",
    "NullNotifier",
]
