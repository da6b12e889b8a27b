# constants.py
MB = 1024 * 1024

DEFAULT_PART_MB = 100       # max uncompressed input per part
DEFAULT_THRESHOLD_MB = 100  # free RAM needed to stage a part in memory

# media presets: name -> capacity in MB (sets threshold, clamps part size)
PRESETS = {
    "cd": 700,
    "dvd": 4700,
    "bluray": 25000,
}

PART_NAME_TEMPLATE = "archive_part{index:03d}.zip"

# favor smaller output over speed
ZIP_COMPRESSLEVEL = 9

# temp staging files
TMP_PREFIX = "zipparts_"
TMP_SUFFIX = ".zipbuf"
STALE_TMP_HOURS = 36
