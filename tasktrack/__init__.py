"""tasktrack core library: task model, JSON store and transfers.

Public API re-exports for convenient imports:
    from tasktrack import create_task, get_all_tasks, export_tasks, ...
"""

__version__ = "1.0.0"

# Settings & paths
from tasktrack.config import (
    Settings,
    get_settings,
    db_path,
)

# Errors
from tasktrack.errors import (
    TaskTrackError,
    ConfigError,
    ValidationError,
    DuplicateTitleError,
    TaskNotFoundError,
    StorageError,
    CorruptStoreError,
    DownloadError,
)

# Models
from tasktrack.models import MIN_TITLE_LENGTH, Task

# Repository
from tasktrack.tasks import (
    validate_task,
    db_exists,
    create_db,
    reset_db,
    load_tasks,
    save_tasks,
    get_all_tasks,
    get_task_by_id,
    get_task_by_title,
    find_task,
    next_id,
    save_task,
    create_task,
    update_task,
    delete_task,
    delete_all_tasks,
)

# Transfers
from tasktrack.transfer import (
    ImportReport,
    export_tasks,
    import_tasks,
    download_tasks,
)
