from turnos.utils.ids import generate_short_id, generate_uuid
from turnos.utils.phone import digits_only, normalize_phone_ar, phones_match

__all__ = ["digits_only", "generate_short_id", "generate_uuid", "normalize_phone_ar", "phones_match"]
