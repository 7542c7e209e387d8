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

import logging
import re
from typing import Optional, Tuple

from database import config
from models.certificado_model import CertificadoModel
from utilities.errores import ErrorAsignacionConcurrente

logger = logging.getLogger(__name__)

# PREFIJO-AÑO-NN: un código de certificado completo usado por error como prefijo
_CODIGO_COMPLETO = re.compile(r"^(?P<raiz>.+-\d{4})-\d{2,}$")


class AsignadorCodigos:
    """
    Calcula el siguiente código de certificado libre dentro de un alcance
    (prefijo, año y edición opcional).

    No guarda contadores en memoria: cada asignación vuelve a leer los códigos
    existentes, de modo que varias instancias del proceso comparten el estado
    a través de la base de datos. La unicidad final la garantiza la restricción
    UNIQUE de `certificados.codigo` junto con `insertar_con_codigo`.
    """

    def __init__(self, model_certificado: CertificadoModel | None = None, max_reintentos: int | None = None):
        self.model_certificado = model_certificado or CertificadoModel()
        self.max_reintentos = max_reintentos or config.MAX_REINTENTOS_ASIGNACION

    # ----------------------------
    # ALCANCE
    # ----------------------------
    @staticmethod
    def raiz_prefijo(prefijo_base: str, anio: int, edicion: Optional[int] = None) -> str:
        """
        Reduce un prefijo a su raíz alfabética ("LM").

        Quita una secuencia final si el prefijo ya era un código completo
        ("LM-2025-03") y después los segmentos finales iguales al año o a la
        edición, en cualquier orden ("LM-2025", "LM-1-2025", "LM-2025-1").
        """
        raiz = prefijo_base.strip().strip("-")

        coincidencia = _CODIGO_COMPLETO.match(raiz)
        if coincidencia:
            logger.warning("Prefijo con secuencia incluida '%s'; se usa '%s'", prefijo_base, coincidencia["raiz"])
            raiz = coincidencia["raiz"]

        pendientes = {str(anio)}
        if edicion:
            pendientes.add(str(edicion))
        segmentos = raiz.split("-")
        while len(segmentos) > 1 and segmentos[-1] in pendientes:
            pendientes.discard(segmentos.pop())
        return "-".join(segmentos)

    @classmethod
    def prefijo_alcance(cls, prefijo_base: str, anio: int, edicion: Optional[int] = None) -> str:
        """Prefijo común de todos los códigos del alcance, ej. "LM-2025-" o "LM-1-2025-"."""
        raiz = cls.raiz_prefijo(prefijo_base, anio, edicion)
        if edicion:
            return f"{raiz}-{edicion}-{anio}-"
        return f"{raiz}-{anio}-"

    # ----------------------------
    # ASIGNACIÓN
    # ----------------------------
    def siguiente_secuencia(self, prefijo_base: str, anio: int, edicion: Optional[int] = None) -> Tuple[int, str]:
        """
        Calcula el siguiente número de secuencia y su código formateado.

        Se toma el máximo conocido más uno; los huecos dejados por certificados
        eliminados no se rellenan. Los códigos cuyo final no es numérico se ignoran.

        Returns:
            tuple[int, str]: (número, código), ej. (8, "LM-2025-08").
        """
        prefijo = self.prefijo_alcance(prefijo_base, anio, edicion)
        patron = re.compile(rf"^{re.escape(prefijo)}(\d+)$")

        maximo = 0
        for codigo in self.model_certificado.codigos_con_prefijo(prefijo):
            coincidencia = patron.match(codigo or "")
            if not coincidencia:
                continue
            maximo = max(maximo, int(coincidencia.group(1)))

        siguiente = maximo + 1
        return siguiente, f"{prefijo}{siguiente:02d}"

    def asignar_siguiente(self, prefijo_base: str, anio: int, edicion: Optional[int] = None) -> str:
        """
        Devuelve el siguiente código libre del alcance.

        Args:
            prefijo_base (str): Código base del curso ("LM" o el ID del curso).
            anio (int): Año del certificado.
            edicion (int, optional): Edición del curso.

        Returns:
            str: Código de certificado, ej. "LM-2025-08".
        """
        return self.siguiente_secuencia(prefijo_base, anio, edicion)[1]

    def insertar_con_codigo(self, prefijo_base: str, anio: int, edicion: Optional[int], datos: dict):
        """
        Asigna un código y crea el certificado con inserción condicional.

        Si otro proceso tomó el mismo código entre la lectura y la escritura,
        se vuelve a calcular y se reintenta hasta `max_reintentos` veces.

        Args:
            prefijo_base (str): Código base del curso.
            anio (int): Año del certificado.
            edicion (int, optional): Edición del curso.
            datos (dict): Campos del certificado, sin `codigo`.

        Returns:
            Certificado: El certificado creado.

        Raises:
            ErrorAsignacionConcurrente: Si todos los intentos colisionaron.
        """
        codigo = None
        for intento in range(1, self.max_reintentos + 1):
            codigo = self.asignar_siguiente(prefijo_base, anio, edicion)
            certificado = self.model_certificado.crear_si_no_existe({**datos, "codigo": codigo}, clave="codigo")
            if certificado is not None:
                return certificado
            logger.warning("Colisión en el código %s (intento %d de %d)", codigo, intento, self.max_reintentos)

        raise ErrorAsignacionConcurrente(
            f"No se pudo asignar un código único tras {self.max_reintentos} intentos "
            f"(último código probado: {codigo}). Vuelva a importar esta fila.",
            intentos=self.max_reintentos,
        )
