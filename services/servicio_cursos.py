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
from datetime import date
from typing import List

from config.mappings import TIPOS_CURSO, ORIGENES, ESTADOS_CURSO, ANIO_MINIMO
from models.curso_model import CursoModel
from services.proveedor_carpetas import ProveedorCarpetas
from utilities.errores import ErrorValidacionCurso
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

_CODIGO_CURSO = re.compile(r"^[A-Z0-9\-]{1,20}$")
LONGITUD_MAXIMA_NOMBRE = 500


class ServicioCursos:
    """Alta, validación y baja de cursos desde la administración."""

    def __init__(self, model_curso: CursoModel | None = None, proveedor_carpetas: ProveedorCarpetas | None = None):
        self.model_curso = model_curso or CursoModel()
        self.proveedor_carpetas = proveedor_carpetas or ProveedorCarpetas()

    @staticmethod
    def validar_curso(datos: dict) -> List[str]:
        """
        Valida los datos de un curso nuevo.

        Args:
            datos (dict): id, nombre, tipo_curso, anio, mes, edicion, origen, estado.

        Returns:
            List[str]: Mensajes de error; vacía si el curso es válido.
        """
        errores = []

        codigo = datos.get("id")
        if not codigo or not isinstance(codigo, str):
            errores.append("El código del curso es requerido")
        elif not _CODIGO_CURSO.match(codigo):
            errores.append("El código debe tener 1-20 caracteres (letras mayúsculas, números y guiones)")

        nombre = datos.get("nombre")
        if not nombre or not str(nombre).strip():
            errores.append("Nombre del curso es requerido y no puede estar vacío")
        elif len(str(nombre)) > LONGITUD_MAXIMA_NOMBRE:
            errores.append(f"Nombre del curso no puede exceder {LONGITUD_MAXIMA_NOMBRE} caracteres")

        tipo = datos.get("tipo_curso")
        if tipo and tipo not in TIPOS_CURSO:
            errores.append(f"Tipo de curso inválido. Debe ser uno de: {', '.join(TIPOS_CURSO)}")

        anio_maximo = date.today().year + 1
        try:
            anio = Sanitizer.limpiar_entero(datos.get("anio"))
        except ValueError:
            anio = None
        if anio is None or not ANIO_MINIMO <= anio <= anio_maximo:
            errores.append(
                f"El año es requerido y debe ser un número válido entre {ANIO_MINIMO} y {anio_maximo}"
            )

        estado = datos.get("estado")
        if estado and estado not in ESTADOS_CURSO:
            errores.append(f"El estado debe ser uno de: {', '.join(ESTADOS_CURSO)}")

        origen = datos.get("origen")
        if origen and origen not in ORIGENES:
            errores.append(f"El origen debe ser uno de: {', '.join(ORIGENES)}")

        mes = datos.get("mes")
        if mes is not None:
            try:
                mes_valido = 1 <= int(mes) <= 12
            except (TypeError, ValueError):
                mes_valido = False
            if not mes_valido:
                errores.append("El mes debe ser un número entre 1 y 12")
            if datos.get("edicion") is None:
                errores.append("Si se especifica un mes, también debe especificarse una edición")

        edicion = datos.get("edicion")
        if edicion is not None and (not isinstance(edicion, int) or isinstance(edicion, bool) or edicion < 1):
            errores.append("La edición debe ser un número mayor a 0")

        return errores

    def crear_curso(self, datos: dict):
        """
        Crea un curso y su carpeta.

        La carpeta es opcional: si no se puede crear el curso queda sin
        `carpeta_id` y la importación la volverá a intentar.

        Args:
            datos (dict): Datos del curso (ver `validar_curso`).

        Returns:
            Curso: El curso creado.

        Raises:
            ErrorValidacionCurso: Si los datos no son válidos o el código ya existe.
        """
        errores = self.validar_curso(datos)
        if errores:
            raise ErrorValidacionCurso(errores)

        codigo = datos["id"]
        registro = {
            "id": codigo,
            "codigo": codigo,
            "nombre": datos["nombre"].strip(),
            "tipo_curso": datos.get("tipo_curso") or "Curso",
            "anio": Sanitizer.limpiar_entero(datos["anio"]),
            "mes": int(datos["mes"]) if datos.get("mes") is not None else None,
            "edicion": datos.get("edicion"),
            "origen": datos.get("origen") or "nuevo",
            "estado": datos.get("estado") or "active",
        }
        curso = self.model_curso.crear_si_no_existe(registro, clave="id")
        if curso is None:
            raise ErrorValidacionCurso(["Ya existe un curso con este código"])
        logger.info("Curso creado: %s (%s)", curso.id, curso.nombre)

        try:
            carpeta = self.proveedor_carpetas.asegurar_carpeta(curso.id, curso.nombre, curso.anio)
            curso = self.model_curso.update(curso.id, {"carpeta_id": carpeta})
        except Exception as e:
            logger.warning("El curso %s se creó sin carpeta: %s", codigo, e)

        return curso

    def archivar_o_eliminar(self, curso_id: str) -> str:
        """
        Da de baja un curso.

        Si tiene certificados se archiva para no romper sus referencias; si no,
        se elimina.

        Returns:
            str: "archivado", "eliminado" o "no_encontrado".
        """
        curso = self.model_curso.get_by_id(curso_id)
        if curso is None:
            return "no_encontrado"

        emitidos = self.model_curso.certificados_emitidos(curso_id)
        if emitidos:
            self.model_curso.archivar(curso_id)
            logger.info("Curso %s archivado (%d certificados)", curso_id, emitidos)
            return "archivado"

        self.model_curso.delete(curso_id)
        logger.info("Curso %s eliminado", curso_id)
        return "eliminado"
