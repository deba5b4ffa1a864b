# pubstock/config.py
import os
from dotenv import load_dotenv

load_dotenv()

BACKEND = os.getenv("PUBSTOCK_BACKEND", "http")  # "http" or "supabase"
API_URL = os.getenv("PUBSTOCK_API_URL", "http://127.0.0.1:8085")
REQUEST_TIMEOUT = float(os.getenv("PUBSTOCK_TIMEOUT", "10"))

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_ANON_KEY = os.getenv("SUPABASE_ANON_KEY")
PRODUCTS_TABLE = os.getenv("PUBSTOCK_TABLE", "products")

ORDER_DIR = os.getenv("PUBSTOCK_ORDER_DIR", ".")
