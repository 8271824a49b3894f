APP_NAME = "Node Editor"
APP_VERSION = "0.3.0"

RUNTIME_DIR_NAME = "NodeEditor"
SETTINGS_FILENAME = "node_editor_settings.json"
DIAG_LOG_FILENAME = "node_editor_diagnostics.log"
DIAG_LOG_MAX_BYTES = 512 * 1024
DIAG_LOG_KEEP_BYTES = 256 * 1024
DIAG_LOG_TAIL_MAX_CHARS = 12000

# JSON rendering shared by the read view and document writes.
JSON_INDENT = 2
EMPTY_OBJECT_TEXT = "{}"
ROOT_PATH_MARKER = "$"

ROW_TYPE_STRING = "string"
ROW_TYPE_NUMBER = "number"
ROW_TYPE_BOOLEAN = "boolean"
ROW_TYPE_NULL = "null"
ROW_TYPE_ARRAY = "array"
ROW_TYPE_OBJECT = "object"
ROW_TYPES = (
    ROW_TYPE_STRING,
    ROW_TYPE_NUMBER,
    ROW_TYPE_BOOLEAN,
    ROW_TYPE_NULL,
    ROW_TYPE_ARRAY,
    ROW_TYPE_OBJECT,
)
CONTAINER_ROW_TYPES = frozenset({ROW_TYPE_ARRAY, ROW_TYPE_OBJECT})

NEW_FIELD_KEY_PREFIX = "key"
NEW_FIELD_TYPE = ROW_TYPE_STRING

FONT_SIZE_DEFAULT = 10
FONT_SIZE_MIN = 6
FONT_SIZE_MAX = 32

MODAL_TITLE = "Node"
MODAL_MIN_WIDTH = 350
MODAL_MAX_WIDTH = 600
MODAL_CONTENT_MAX_ROWS = 20
MODAL_TEXTAREA_MIN_ROWS = 6
MODAL_TEXTAREA_MAX_ROWS = 20
MODAL_ICON_SIZE = 16

LABEL_CONTENT = "Content"
LABEL_JSON_PATH = "JSON Path"
COPY_LABEL = "Copy to clipboard"
COPIED_LABEL = "Copied to clipboard"
