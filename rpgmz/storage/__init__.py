"""Safe read/write access to an RPG Maker MZ project's JSON data.

Project layout:
  <project>/
    game.rmmzproject     Marker file (Game.rmmzproject on older projects)
    data/
      System.json        Game settings; its versionId is the reload trigger
      Actors.json ...    Database files: [null, {id: 1, ...}, ...]
      MapInfos.json      Map tree, same null-headed array shape
      Map001.json ...    One document per map, with its own events array
    img/<category>/      Image resources (read-only here)
    audio/<category>/    Audio resources (read-only here)

Writes: every document write copies the old file to <name>.bak, writes
<name>.tmp, then renames it over the target. Readers never see a partial
file; only one backup generation is kept.

Reload trigger: each successful data mutation increments
System.json versionId by one after the write, so an open editor notices
the change and reloads.

IDs: a record's ID is its array index. Deleting nulls the slot, creating
appends at len(array); IDs are never reused or compacted.
"""

# Re-export the public surface so `from rpgmz import storage` is enough.

from .errors import (  # noqa: F401
    CorruptDocumentError,
    DocumentValidationError,
    MissingDocumentError,
    NoProjectLoadedError,
    NotFoundError,
    ProjectExistsError,
    ProtectedError,
    StorageError,
    StorageIOError,
)

from .files import (  # noqa: F401
    backup_path,
    copy_file,
    delete_file,
    ensure_dir,
    exists,
    list_dirs,
    list_files,
    read_json,
    read_json_raw,
    temp_path,
    validate,
    write_json,
)

from .version import (  # noqa: F401
    VERSION_FIELD,
    VersionLedger,
)

from .database import (  # noqa: F401
    EntityCollection,
)

from .maps import (  # noqa: F401
    MAP_FILE_RE,
    MapStore,
    map_filename,
)

from .project import (  # noqa: F401
    PROJECT_FILES,
    REQUIRED_DATA_FILES,
    RESOURCE_DIRS,
    ProjectManager,
)
