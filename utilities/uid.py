#  Copyright (c) 2026 Fleer
#  Permission is hereby granted, free of charge, to any person obtaining a copy
#  of this software and associated documentation files (the "Software"), to deal
#  in the Software without restriction, including without limitation the rights
#  to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
#  copies of the Software, and to permit persons to whom the Software is
#  furnished to do so, subject to the following conditions:
#
#  The above copyright notice and this permission notice shall be included in all
#  copies or substantial portions of the Software.

from datetime import datetime

import ulid


def generar_uid() -> str:
    """
    Genera la clave opaca de un certificado como ULID.

    Los ULID se ordenan lexicográficamente por fecha de creación, de modo que
    dos certificados insertados en el mismo lote conservan su orden.

    Returns:
        str: Cadena ULID de 26 caracteres.
    """
    return str(ulid.new())


def marca_tiempo() -> datetime:
    """Fecha y hora actual para las columnas de auditoría (creado_en, actualizado_en)."""
    return datetime.now().replace(microsecond=0)
