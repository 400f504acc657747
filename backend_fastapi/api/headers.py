JSON_MEDIA_TYPE = "application/json"


def _tokens(header: str) -> set[str]:
    return {
        token.strip().lower()
        for media_range in header.split(",")
        for token in media_range.split(";")
    }


def valid_accept_header(accept: str | None) -> bool:
    """
    Verifica que la cabecera Accept sea válida para los endpoints que retornan JSON.

    Es válida si no se envía (o viene vacía), en cuyo caso el servicio retorna
    el contenido que soporta por defecto. Si se envía, debe incluir
    `application/json` entre sus valores, considerando que puede venir
    acompañada de parámetros como en `application/json;charset=utf-8`.
    Comodines como `*/*` no son válidos.
    """
    if accept is None or not accept.strip():
        return True
    return JSON_MEDIA_TYPE in _tokens(accept)


def valid_content_type_header(content_type: str | None) -> bool:
    """
    Verifica que Content-Type tenga el valor `application/json`, admitiendo
    parámetros como `charset=utf-8`. Un valor ausente o vacío no es válido.
    """
    if not content_type:
        return False
    return JSON_MEDIA_TYPE in _tokens(content_type)
