"""
Application constants for VidhiSahayak.
"""

# Providers, in fallback order
PROVIDER_GEMINI = "gemini"
PROVIDER_PERPLEXITY = "perplexity"
PROVIDER_OPENAI = "openai"
PROVIDER_NONE = "none"
PROVIDER_ORDER = (PROVIDER_GEMINI, PROVIDER_PERPLEXITY, PROVIDER_OPENAI)

# Gemini model errors that move on to the next model instead of aborting
GEMINI_SKIP_MODEL_STATUS = (403, 404)
RATE_LIMIT_STATUS = 429

# Chat roles
ROLE_USER = "user"
ROLE_ASSISTANT = "assistant"
CHAT_ROLES = (ROLE_USER, ROLE_ASSISTANT)

# Lawyer verification
VERIFICATION_PENDING = "pending"
VERIFICATION_VERIFIED = "verified"
VERIFICATION_REJECTED = "rejected"
VERIFICATION_STATUSES = (VERIFICATION_PENDING, VERIFICATION_VERIFIED, VERIFICATION_REJECTED)

DEFAULT_LANGUAGE = "en-IN"
AUTO_LANGUAGE = "auto"

# Log prompts only up to this many characters
PROMPT_LOG_CHARS = 300

SYSTEM_PROMPT = (
    "You are VidhiSahayak, a helpful legal assistant for India. Be concise, factual, "
    "cite sources when possible, and suggest next steps. Provide general information, "
    "not legal advice."
)

GUIDANCE_PROMPT = """
### RELEVANT CATEGORY: {category_name}
Use this checklist when it fits the user's question:
- Where to get the document: {where_to_get}
- Documents/proofs required: {type_required}
- Whom to contact to verify: {verification_contacts}
- Where to submit: {submission_offices}
- Printing: {print_guidance}
Steps:
{steps}
"""

LANGUAGE_PROMPT = (
    "Reply entirely in {language_name}, using its native script, even if the question "
    "was written in another language."
)

FALLBACK_REPLY = (
    "I heard: \"{message}\". Here’s a quick next step: tell me the category or document "
    "you need (e.g., rental agreement, affidavit, IPC query), and I’ll guide you with "
    "steps and options."
)

TTS_AUDIO_ENCODING = "MP3"
