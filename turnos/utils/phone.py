import re

NON_DIGITS = re.compile(r"\D")

# Dígitos usados para comparar remitentes con el teléfono del turno
PHONE_MATCH_DIGITS = 10


def digits_only(phone: str | None) -> str:
    """Elimina todo lo que no sea dígito"""
    return NON_DIGITS.sub("", phone or "")


def normalize_phone_ar(phone: str) -> str:
    """
    Normaliza un teléfono argentino al formato internacional de WhatsApp (549...).

    Examples:
        011-1234-5678  -> 5491112345678
        +5491112345678 -> 5491112345678
        1512345678     -> 5491112345678
    """
    digits = digits_only(phone)
    if digits.startswith("54"):
        return digits
    if digits.startswith("0"):
        digits = digits[1:]
    if digits.startswith("15"):
        # Celular local sin característica: se asume Buenos Aires (11)
        digits = "11" + digits[2:]
    return "549" + digits


def phones_match(stored_phone: str | None, sender: str | None) -> bool:
    """
    Compara dos teléfonos por sufijo de hasta 10 dígitos.

    Coinciden si uno termina en los últimos 10 dígitos del otro, en cualquier
    sentido: así un número local guardado sin característica (4567-8901)
    coincide con el remitente internacional (5491145678901). Un teléfono sin
    dígitos nunca coincide.
    """
    stored = digits_only(stored_phone)
    incoming = digits_only(sender)
    if not stored or not incoming:
        return False
    return stored.endswith(incoming[-PHONE_MATCH_DIGITS:]) or incoming.endswith(stored[-PHONE_MATCH_DIGITS:])
