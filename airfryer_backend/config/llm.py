"""Defaults for the vision LLM that are tracked in Git."""

# Model version used by default. Can be overridden via env if needed.
DEFAULT_LLM_MODEL = "gpt-4o-mini"

DEFAULT_LLM_SYSTEM_PROMPT = (
    "You are an expert chef specializing in air fryer cooking."
)

# Instruction sent alongside every food photo.
IDENTIFY_FOOD_PROMPT = (
    "You will identify the food item in the photo and provide air fryer cooking "
    "instructions, including cooking time in minutes and temperature in Celsius. "
    "Use the photo as the primary source of information about the food. "
    'Respond with JSON of the form {"foodName": "...", "cookingTime": "...", '
    '"cookingTemperatureCelsius": "..."}: the food name, the cooking time in '
    "minutes and the cooking temperature in Celsius. "
    "Only output JSON format. NO ADDITIONAL TEXT!"
)

# Request size limit. Photos travel base64-encoded, which grows them by 4/3,
# so this admits photos of roughly 12 MiB.
DEFAULT_MAX_UPLOAD_BYTES = 16 * 1024 * 1024
