"""
Constants and configuration values for Ayra.

This module centralizes all constant values, prompt catalogues and
default settings used throughout the retouch core.
"""

# Resource naming
DEFAULT_MIME_TYPE = "image/png"
DEFAULT_OUTPUT_FORMAT = "PNG"
DOWNLOAD_PREFIX = "edited-"
RESOURCE_NAME_EXTENSION = ".png"

# Name prefixes for resources produced by each operation
PREFIX_EDITED = "edited"
PREFIX_FILTERED = "filtered"
PREFIX_ADJUSTED = "adjusted"
PREFIX_ENHANCED = "enhanced"
PREFIX_BG_REMOVED = "bg-removed"
PREFIX_CROPPED = "cropped"

# MIME types accepted on intake, keyed by file suffix
SUPPORTED_IMAGE_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".webp": "image/webp",
    ".gif": "image/gif",
    ".bmp": "image/bmp",
    ".tiff": "image/tiff",
}

# Edit operation names
OP_EDIT_IMAGE = "edit-image"
OP_FILTER = "filter"
OP_ADJUST = "adjust"
OP_AUTO_ENHANCE = "auto-enhance"
OP_REMOVE_BACKGROUND = "remove-background"

# Crop
DEFAULT_PIXEL_RATIO = 1.0
CROP_BOUNDS_TOLERANCE = 0.5
CROP_ASPECTS = {
    "Free": None,
    "1:1": 1 / 1,
    "16:9": 16 / 9,
    "4:3": 4 / 3,
}

# Retouch prompt composition
FACE_PROTECTION_PROMPT = "do not touch face and don't change face elements and features"
PROMPT_PART_SEPARATOR = ", "
SAFETY_SEPARATOR = ". "
OUTFIT_PROMPT_PREFIX = "replace outfit with a"

RETOUCH_BADGES = (
    "Change pose",
    "Change clothes",
    "Change hairstyle",
    "Use specs",
    "Use cap",
    "Change background",
    "Change weather",
    "Clean blemishes",
    "Add makeup",
    "Blur background",
    "Expand scene",
)

CLOTHING_STYLES = ("hoodie", "jacket", "dress", "suit", "t-shirt")

# Wardrobe colors (name -> swatch hex)
CLOTHING_COLORS = {
    "Red": "#ef4444",
    "Blue": "#3b82f6",
    "Green": "#22c55e",
    "Yellow": "#eab308",
    "Black": "#000000",
    "White": "#ffffff",
}

# Preset prompts
FILTER_PRESETS = {
    "Synthwave": "Apply a vibrant 80s synthwave aesthetic with neon magenta and cyan glows, and subtle scan lines.",
    "Anime": "Give the image a vibrant Japanese anime style, with bold outlines, cel-shading, and saturated colors.",
    "Lomo": "Apply a Lomography-style cross-processing film effect with high-contrast, oversaturated colors, and dark vignetting.",
    "Glitch": "Transform the image into a futuristic holographic projection with digital glitch effects and chromatic aberration.",
}

ADJUSTMENT_PRESETS = {
    "Blur BG": "Apply a realistic depth-of-field effect, making the background blurry while keeping the main subject in sharp focus.",
    "Enhance": "Slightly enhance the sharpness and details of the image without making it look unnatural.",
    "Warmer": "Adjust the color temperature to give the image warmer, golden-hour style lighting.",
    "Studio": "Add dramatic, professional studio lighting to the main subject.",
}

AUTO_ENHANCE_PROMPT = (
    "Perform a general, tasteful auto-enhancement of the image. Improve the overall quality "
    "by adjusting color balance, contrast, sharpness, vibrance, and saturation. "
    "The result should look natural and professional."
)

# Session defaults
DEFAULT_FACE_PROTECTED = True
UNLIMITED_LIBRARY_SIZE = 0

# Config field names
FIELD_FACE_PROTECTED_DEFAULT = "face_protected_default"
FIELD_OUTPUT_FORMAT = "output_format"
FIELD_DOWNLOAD_PREFIX = "download_prefix"
FIELD_DEFAULT_PIXEL_RATIO = "default_pixel_ratio"
FIELD_MAX_LIBRARY_SIZE = "max_library_size"
