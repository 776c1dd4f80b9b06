"""
Default values for configuration models.
"""

# Size unit used throughout: 1 MB = 1,048,576 bytes
BYTES_PER_MB = 1024 * 1024

DEFAULT_SCRATCH_PATH = "./temp"
DEFAULT_MAX_FILE_SIZE_MB = 10
DEFAULT_RETENTION_SECONDS = 0
DEFAULT_FETCH_TIMEOUT_SECONDS = 30.0

DEFAULT_ACCEPTED_FORMATS = frozenset({
    "jpg", "jpeg", "png", "gif", "webp", "bmp", "tiff",
    "pdf",
    "docx", "doc", "xlsx", "xls", "pptx", "ppt",
})

# Environment variables read by ``ingestor_config_from_env``
ENV_SCRATCH_PATH = "DOCGATE_SCRATCH_PATH"
ENV_MAX_FILE_SIZE_MB = "DOCGATE_MAX_FILE_SIZE_MB"
ENV_ACCEPTED_FORMATS = "DOCGATE_ACCEPTED_FORMATS"
ENV_RETENTION_SECONDS = "DOCGATE_RETENTION_SECONDS"
ENV_FETCH_TIMEOUT_SECONDS = "DOCGATE_FETCH_TIMEOUT_SECONDS"
