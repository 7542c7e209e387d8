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
from typing import Optional, Tuple

from config.mappings import (
    ESTADOS_ENTREGA, FUENTES_CONTACTO, ESTADO_ENTREGA_DEFECTO, FUENTE_CONTACTO_DEFECTO
)
from database.schemas import NoEncontrado
from models.certificado_model import CertificadoModel
from models.curso_model import CursoModel
from services.asignador_codigos import AsignadorCodigos
from services.resolvedor_cursos import ResolvedorCursos
from utilities.errores import ErrorValidacionFila, CursoNoEncontrado
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

# Campos opcionales que el alta manual copia tal cual
CAMPOS_OPCIONALES = (
    "correo", "telefono", "archivo_drive_id", "entregado_a", "ubicacion_fisica", "codigo_folio",
)


class ServicioCertificados:
    """
    Alta manual de certificados y vista previa del siguiente código.

    Comparte el `AsignadorCodigos` con la importación masiva, así que un alta
    manual y una importación simultáneas nunca reciben el mismo código.
    """

    def __init__(
        self,
        model_curso: CursoModel | None = None,
        model_certificado: CertificadoModel | None = None,
        resolvedor: ResolvedorCursos | None = None,
        asignador: AsignadorCodigos | None = None,
    ):
        self.model_curso = model_curso or CursoModel()
        self.model_certificado = model_certificado or CertificadoModel()
        self.resolvedor = resolvedor or ResolvedorCursos(self.model_curso)
        self.asignador = asignador or AsignadorCodigos(self.model_certificado)

    def siguiente_secuencia(self, codigo_curso: str, anio: int, edicion: Optional[int] = None) -> Tuple[int, str]:
        """
        Código que recibiría el próximo certificado del curso, sin reservarlo.

        Args:
            codigo_curso (str): Código base del curso ("LM" o "LM-2025").
            anio (int): Año del certificado.
            edicion (int, optional): Edición del curso.

        Returns:
            tuple[int, str]: (número de secuencia, código formateado).
        """
        if not codigo_curso or not str(codigo_curso).strip():
            raise ValueError("Falta el código del curso")
        return self.asignador.siguiente_secuencia(str(codigo_curso).strip(), int(anio), edicion)

    def registrar_manual(self, datos: dict):
        """
        Crea un certificado a partir de un formulario.

        El curso se busca por código (con las mismas reglas que la importación)
        y nunca se crea. Año, mes, edición, tipo y origen se heredan del curso
        cuando no vienen en `datos`.

        Args:
            datos (dict): Requiere `codigo_curso` y `nombre_completo`.

        Returns:
            Certificado: El certificado creado con su código asignado.

        Raises:
            ErrorValidacionFila: Si faltan datos, un valor no es válido o el
                curso está archivado.
            CursoNoEncontrado: Si el código del curso no se resuelve.
            ErrorAsignacionConcurrente: Si no se obtuvo un código libre.
        """
        nombre = Sanitizer.limpiar_celda(datos.get("nombre_completo"))
        if not nombre:
            raise ErrorValidacionFila("El nombre completo es requerido", campo="nombre_completo")
        codigo_curso = Sanitizer.limpiar_celda(datos.get("codigo_curso"))
        if not codigo_curso:
            raise ErrorValidacionFila("El código del curso es requerido", campo="codigo_curso")

        resuelto = self.resolvedor.resolver_por_codigo(codigo_curso)
        if isinstance(resuelto, NoEncontrado):
            raise CursoNoEncontrado(resuelto.mensaje)
        curso = resuelto.curso
        if curso.estado == "archived":
            raise ErrorValidacionFila(
                f"El curso '{curso.id}' ({curso.nombre}) está archivado y no admite certificados.",
                campo="codigo_curso",
            )

        estado_entrega = datos.get("estado_entrega") or ESTADO_ENTREGA_DEFECTO
        if estado_entrega not in ESTADOS_ENTREGA:
            raise ErrorValidacionFila(f"Estado de entrega inválido: '{estado_entrega}'", campo="estado_entrega")
        fuente_contacto = datos.get("fuente_contacto") or FUENTE_CONTACTO_DEFECTO
        if fuente_contacto not in FUENTES_CONTACTO:
            raise ErrorValidacionFila(f"Fuente de contacto inválida: '{fuente_contacto}'", campo="fuente_contacto")

        anio = datos.get("anio") or curso.anio
        edicion = datos.get("edicion") if datos.get("edicion") is not None else curso.edicion
        registro = {
            "curso_id": curso.id,
            "nombre_completo": nombre,
            "nombre_curso": curso.nombre,
            "tipo_curso": datos.get("tipo_curso") or curso.tipo_curso,
            "anio": int(anio),
            "mes": datos.get("mes") if datos.get("mes") is not None else curso.mes,
            "edicion": edicion,
            "origen": datos.get("origen") or curso.origen,
            "estado_entrega": estado_entrega,
            "fuente_contacto": fuente_contacto,
            "consentimiento_marketing": bool(datos.get("consentimiento_marketing", False)),
        }
        for campo in CAMPOS_OPCIONALES:
            if datos.get(campo):
                registro[campo] = datos[campo]
        if registro.get("correo"):
            registro["correo"] = Sanitizer.limpiar_correo(registro["correo"])

        certificado = self.asignador.insertar_con_codigo(curso.id, curso.anio, curso.edicion, registro)
        logger.info("Certificado %s registrado manualmente para %s", certificado.codigo, nombre)
        return certificado
