import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env from project root
env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=env_path)

DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./barberbook.db")

# Managed auth service (tokens are issued there, we only verify them)
AUTH_URL = os.getenv("AUTH_URL", "http://localhost:54321/auth/v1")
AUTH_SERVICE_ROLE_KEY = os.getenv("AUTH_SERVICE_ROLE_KEY")
AUTH_JWT_AUDIENCE = os.getenv("AUTH_JWT_AUDIENCE", "authenticated")
AUTH_JWT_SECRET = os.getenv("AUTH_JWT_SECRET")
if not AUTH_JWT_SECRET:
    import warnings

    warnings.warn(
        "AUTH_JWT_SECRET not set! Using insecure default - DO NOT USE IN PRODUCTION",
        RuntimeWarning,
        stacklevel=2,
    )
    AUTH_JWT_SECRET = "INSECURE-DEV-JWT-SECRET-CHANGE-IN-PRODUCTION"  # noqa: S105 - Dev fallback only

# Frontend base URL (public booking site)
FRONTEND_URL = os.getenv("FRONTEND_URL", "http://localhost:5173")

# n8n workflow webhooks used for email and WhatsApp delivery
N8N_EMAIL_WEBHOOK_URL = os.getenv("N8N_EMAIL_WEBHOOK_URL")
N8N_WHATSAPP_WEBHOOK_URL = os.getenv("N8N_WHATSAPP_WEBHOOK_URL")

# Outbound HTTP timeout for integrations (seconds)
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))

# Mercado Pago (client subscription payments)
MERCADOPAGO_API_URL = os.getenv("MERCADOPAGO_API_URL", "https://api.mercadopago.com")
MERCADOPAGO_ACCESS_TOKEN = os.getenv("MERCADOPAGO_ACCESS_TOKEN")

# AI image gateway for tutorial illustrations
AI_GATEWAY_URL = os.getenv("AI_GATEWAY_URL", "https://ai.gateway.lovable.dev/v1/chat/completions")
AI_GATEWAY_API_KEY = os.getenv("AI_GATEWAY_API_KEY")
AI_IMAGE_MODEL = os.getenv("AI_IMAGE_MODEL", "google/gemini-2.5-flash-image-preview")

# Business defaults
DEFAULT_COMMISSION_RATE = float(os.getenv("DEFAULT_COMMISSION_RATE", "50"))
TRIAL_DAYS = int(os.getenv("TRIAL_DAYS", "7"))
DEFAULT_OPENING_TIME = os.getenv("DEFAULT_OPENING_TIME", "08:00")
DEFAULT_CLOSING_TIME = os.getenv("DEFAULT_CLOSING_TIME", "19:00")
DEFAULT_REMINDER_MINUTES = int(os.getenv("DEFAULT_REMINDER_MINUTES", "30"))
