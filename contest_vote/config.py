# env vars + constants
import os

PORT = int(os.getenv("PORT", "8000"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DATA_DIR = os.getenv("DATA_DIR", os.path.join(os.getcwd(), "data"))
VOTES_FILE = "votes.json"
IP_VOTES_FILE = "ip-votes.json"

# Header carrying the voter identity; used verbatim
CLIENT_IP_HEADER = "x-forwarded-for"
UNKNOWN_CLIENT = "unknown"

SPREADSHEET_ID = os.getenv("SPREADSHEET_ID", "17YFQj2csFQZauPDg9j3s5LpKJqGquFzV3yLNgFZ4doI")
SHEET_RANGE = os.getenv("SHEET_RANGE", "Form Responses 1!A2:F")
GOOGLE_SHEETS_CLIENT_EMAIL = os.getenv("GOOGLE_SHEETS_CLIENT_EMAIL")
GOOGLE_SHEETS_PRIVATE_KEY = os.getenv("GOOGLE_SHEETS_PRIVATE_KEY")
GOOGLE_PROJECT_ID = os.getenv("GOOGLE_PROJECT_ID", "extended-optics-461808-e5")

DEFAULT_ACTIVITIES = "ค้นป่าหาสัตว์,กู่ร้องให้ก้องไพร,โหยหวนชวนโดนถีบ"
ACTIVITIES = [a.strip() for a in os.getenv("ACTIVITIES", DEFAULT_ACTIVITIES).split(",") if a.strip()]
