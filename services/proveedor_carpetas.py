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
import os
import re

from database import config
from utilities.errores import AdvertenciaAprovisionamiento

logger = logging.getLogger(__name__)

# Caracteres no válidos en nombres de carpeta (Windows y unidades de red)
_CARACTERES_INVALIDOS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')


class ProveedorCarpetas:
    """
    Asegura que cada curso tenga su carpeta en la ruta compartida de certificados.

    La estructura es `<raíz>/<año>/<código> - <nombre del curso>`. El valor
    devuelto es la ruta absoluta de la carpeta y se guarda en `Curso.carpeta_id`.
    """

    def __init__(self, ruta_raiz: str | None = None):
        """
        Args:
            ruta_raiz (str, optional): Carpeta raíz; por defecto `SHARED_FOLDER_PATH`.
        """
        self.ruta_raiz = ruta_raiz or config.SHARED_FOLDER_PATH

    @staticmethod
    def nombre_carpeta(curso_id: str, nombre_curso: str) -> str:
        """Nombre de la carpeta del curso, sin caracteres que el sistema de archivos rechace."""
        nombre = f"{curso_id} - {(nombre_curso or 'Sin nombre').strip()}"
        return _CARACTERES_INVALIDOS.sub("_", nombre).strip(" .")

    def asegurar_carpeta(self, curso_id: str, nombre_curso: str, anio: int) -> str:
        """
        Obtiene o crea la carpeta Año / Curso.

        Args:
            curso_id (str): Código del curso.
            nombre_curso (str): Nombre legible del curso.
            anio (int): Año del curso.

        Returns:
            str: Ruta absoluta de la carpeta del curso.

        Raises:
            AdvertenciaAprovisionamiento: Si la carpeta no puede crearse.
        """
        ruta = os.path.abspath(os.path.join(
            self.ruta_raiz, str(anio), self.nombre_carpeta(curso_id, nombre_curso)
        ))
        try:
            existia = os.path.isdir(ruta)
            os.makedirs(ruta, exist_ok=True)
        except OSError as e:
            raise AdvertenciaAprovisionamiento(
                f"No se pudo crear la carpeta del curso {curso_id} en {ruta}: {e}"
            ) from e

        if not existia:
            logger.info("Carpeta creada para el curso %s: %s", curso_id, ruta)
        return ruta
