# core/supabase_client.py

from supabase import create_client, Client, ClientOptions
from core.config import settings
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

def get_supabase_client() -> Client:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.

    The inquiries table is written by the public form and read/updated by
    the admin dashboard; both go through this backend, so the browser never
    holds a database key.

    Returns None when credentials are not configured.
    """
    try:
        supabase_url = settings.SUPABASE_URL
        supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY

        if not supabase_url or not supabase_key:
            logger.error("Missing Supabase credentials")
            logger.error(f"   URL: {supabase_url}")
            logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
            return None

        options = ClientOptions(postgrest_client_timeout=settings.SUPABASE_TIMEOUT_SECONDS)
        return create_client(supabase_url, supabase_key, options=options)

    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase() -> dict:
    """
    Simple connectivity check against the inquiries table.
    """
    try:
        client = get_supabase_client()
        if client is None:
            return {"service": "Supabase", "status": "not_configured"}

        table = settings.INQUIRIES_TABLE
        try:
            res = client.table(table).select("id").limit(1).execute()
            tables = {table: {"status": "ok", "rows_found": len(res.data or [])}}
            status = "ok"
        except Exception as err:
            tables = {table: {"status": "error", "detail": str(err)}}
            status = "degraded"

        return {
            "service": "Supabase",
            "status": status,
            "tables": tables,
        }

    except Exception as e:
        logger.error(f"Supabase Ping Error: {e}", exc_info=True)
        return {"service": "Supabase", "status": "error", "detail": str(e)}
