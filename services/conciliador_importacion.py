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
from datetime import date
from typing import Any, Dict, List, Mapping, Optional

from config.mappings import (
    CAMPOS_OBLIGATORIOS, ETIQUETAS_CAMPOS, TIPOS_CURSO, ORIGENES, ESTADOS_ENTREGA,
    FUENTES_CONTACTO, ESTADO_ENTREGA_DEFECTO, FUENTE_CONTACTO_DEFECTO, ANIO_MINIMO, ANIO_MAXIMO
)
from database.schemas import (
    FilaCruda, FilaNormalizada, ReferenciaCurso, NoEncontrado, ErrorFila, ResultadoImportacion
)
from models.certificado_model import CertificadoModel
from models.curso_model import CursoModel
from services.asignador_codigos import AsignadorCodigos
from services.proveedor_carpetas import ProveedorCarpetas
from services.resolvedor_cursos import ResolvedorCursos
from utilities.errores import ErrorGestion, ErrorImportacion, ErrorValidacionFila, CursoNoEncontrado
from utilities.mapeo_columnas import MapeadorEncabezados
from utilities.sanitizer import Sanitizer
from utilities.uid import marca_tiempo

logger = logging.getLogger(__name__)

INSERTADO = "insertado"
ACTUALIZADO = "actualizado"


class ConciliadorImportacion:
    """
    Concilia un lote de filas importadas con los cursos y certificados guardados.

    Cada fila se procesa en orden y de forma aislada: se mapean sus columnas,
    se resuelve (o crea) el curso, se heredan los datos del curso, se asegura
    la carpeta del curso y finalmente se actualiza el certificado existente o
    se inserta uno nuevo con código secuencial. Un error en una fila queda
    registrado con su número y no detiene el resto del lote.
    """

    def __init__(
        self,
        model_curso: CursoModel | None = None,
        model_certificado: CertificadoModel | None = None,
        resolvedor: ResolvedorCursos | None = None,
        asignador: AsignadorCodigos | None = None,
        proveedor_carpetas: ProveedorCarpetas | None = None,
        mapeador: MapeadorEncabezados | None = None,
    ):
        """
        Args:
            model_curso (CursoModel, optional): Acceso a cursos.
            model_certificado (CertificadoModel, optional): Acceso a certificados.
            resolvedor (ResolvedorCursos, optional): Resolución de referencias de curso.
            asignador (AsignadorCodigos, optional): Asignación de códigos de certificado.
            proveedor_carpetas (ProveedorCarpetas, optional): Creación de carpetas de curso.
            mapeador (MapeadorEncabezados, optional): Mapeo de encabezados.
        """
        self.model_curso = model_curso or CursoModel()
        self.model_certificado = model_certificado or CertificadoModel()
        self.resolvedor = resolvedor or ResolvedorCursos(self.model_curso)
        self.asignador = asignador or AsignadorCodigos(self.model_certificado)
        self.proveedor_carpetas = proveedor_carpetas or ProveedorCarpetas()
        self.mapeador = mapeador or MapeadorEncabezados()

    # =========================================================================
    #  LOTE
    # =========================================================================
    def importar_lote(self, filas: List[FilaCruda | Mapping[str, Any]]) -> ResultadoImportacion:
        """
        Procesa todas las filas de una importación.

        Args:
            filas (list): `FilaCruda` o diccionarios {encabezado: celda}. Para los
                diccionarios el número de fila reportado es índice + 2 (la fila 1
                del archivo es el encabezado).

        Returns:
            ResultadoImportacion: Contadores, cursos creados y errores por fila.

        Raises:
            ErrorImportacion: Si `filas` no es una lista.
        """
        if not isinstance(filas, (list, tuple)):
            raise ErrorImportacion(
                f"Las filas a importar deben ser una lista; se recibió {type(filas).__name__}"
            )

        resultado = ResultadoImportacion()
        # Certificados insertados por este lote; no cuentan como registros previos
        creados_en_lote = set()
        for indice, fila in enumerate(filas):
            numero = self._numero_fila(fila, indice)
            try:
                accion = self.procesar_fila(self._a_fila_cruda(fila, numero), resultado, creados_en_lote)
            except ErrorGestion as e:
                logger.info("Fila %d rechazada: %s", numero, e)
                resultado.errores.append(ErrorFila(fila=numero, mensaje=str(e)))
                continue
            except Exception as e:
                logger.exception("Error inesperado procesando la fila %d", numero)
                resultado.errores.append(
                    ErrorFila(fila=numero, mensaje=f"Error inesperado al procesar esta fila: {e}")
                )
                continue

            resultado.exitosos += 1
            if accion == INSERTADO:
                resultado.insertados += 1
            else:
                resultado.actualizados += 1

        logger.info(
            "Importación completada: %d correctas (%d nuevas, %d actualizadas), %d errores, %d cursos creados",
            resultado.exitosos, resultado.insertados, resultado.actualizados,
            len(resultado.errores), len(resultado.cursos_creados),
        )
        return resultado

    @staticmethod
    def _numero_fila(fila, indice: int) -> int:
        if isinstance(fila, FilaCruda):
            return fila.numero
        return indice + 2

    @staticmethod
    def _a_fila_cruda(fila, numero: int) -> FilaCruda:
        if isinstance(fila, FilaCruda):
            return fila
        if not isinstance(fila, Mapping):
            raise ErrorValidacionFila(
                f"La fila no tiene el formato esperado (encabezado: valor); se recibió {type(fila).__name__}"
            )
        return FilaCruda(numero=numero, celdas=dict(fila))

    # =========================================================================
    #  FILA
    # =========================================================================
    def procesar_fila(
        self, fila_cruda: FilaCruda, resultado: ResultadoImportacion, creados_en_lote: set | None = None
    ) -> str:
        """
        Procesa una fila completa.

        La fusión solo considera certificados que ya existían antes del lote:
        dos filas iguales en el mismo archivo producen dos certificados.

        Returns:
            str: INSERTADO o ACTUALIZADO.
        """
        fila = self.mapeador.normalizar(fila_cruda)
        datos = self._validar(fila, list(fila_cruda.celdas.keys()))

        # 1. Curso
        curso = self._resolver_curso(fila, datos, resultado)
        if curso.estado == "archived":
            raise ErrorValidacionFila(
                f"El curso '{curso.id}' ({curso.nombre}) está archivado y no admite certificados."
            )

        # 2. Herencia de campos del curso
        anio = datos["anio"] if datos["anio"] is not None else curso.anio
        campos = {
            "curso_id": curso.id,
            "nombre_completo": datos["nombre_completo"],
            "nombre_curso": curso.nombre,
            "tipo_curso": datos["tipo_curso"] or curso.tipo_curso,
            "anio": anio,
            "mes": datos["mes"] if datos["mes"] is not None else curso.mes,
            "edicion": datos["edicion"] if datos["edicion"] is not None else curso.edicion,
            "origen": datos["origen"] or curso.origen,
        }
        for campo in ("correo", "telefono", "fuente_contacto", "estado_entrega"):
            if datos[campo] is not None:
                campos[campo] = datos[campo]

        # 3. Carpeta del curso (no bloqueante)
        self._asegurar_carpeta(curso)

        # 4. Actualización en sitio o inserción
        creados_en_lote = creados_en_lote if creados_en_lote is not None else set()
        existentes = [
            c for c in self.model_certificado.buscar_duplicados(
                campos["nombre_completo"], campos["nombre_curso"], campos["anio"]
            )
            if c.id not in creados_en_lote
        ]
        if existentes:
            if len(existentes) > 1:
                logger.warning(
                    "Fila %d: %d certificados de '%s' en '%s' (%s); se actualiza %s",
                    fila.numero, len(existentes), campos["nombre_completo"], campos["nombre_curso"],
                    campos["anio"], existentes[0].codigo,
                )
            return self._actualizar(existentes[0], campos)

        certificado = self._insertar(curso, campos)
        creados_en_lote.add(certificado.id)
        return INSERTADO

    def _actualizar(self, existente, campos: Dict[str, Any]) -> str:
        # El archivo adjunto, la fecha de creación y el código se conservan
        cambios = {k: v for k, v in campos.items() if k not in ("archivo_drive_id", "creado_en", "codigo")}
        cambios["actualizado_en"] = marca_tiempo()
        self.model_certificado.update(existente.id, cambios)
        logger.debug("Certificado %s actualizado", existente.codigo)
        return ACTUALIZADO

    def _insertar(self, curso, campos: Dict[str, Any]):
        datos = {
            "correo": None,
            "telefono": None,
            "fuente_contacto": FUENTE_CONTACTO_DEFECTO,
            "estado_entrega": ESTADO_ENTREGA_DEFECTO,
            "archivo_drive_id": None,
            **campos,
        }
        # El ámbito del código es el del curso, no el año o la edición de la fila
        certificado = self.asignador.insertar_con_codigo(curso.id, curso.anio, curso.edicion, datos)
        logger.debug("Certificado %s creado para %s", certificado.codigo, certificado.nombre_completo)
        return certificado

    def _resolver_curso(self, fila: FilaNormalizada, datos: Dict[str, Any], resultado: ResultadoImportacion):
        if fila.codigo_curso:
            resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo=fila.codigo_curso))
            if isinstance(resuelto, NoEncontrado):
                raise CursoNoEncontrado(resuelto.mensaje)
            return resuelto.curso

        if datos["mes"] is not None and datos["edicion"] is None:
            raise ErrorValidacionFila(
                f"Si se indica '{ETIQUETAS_CAMPOS['mes']}' para el curso '{fila.nombre_curso}', "
                f"también debe indicarse '{ETIQUETAS_CAMPOS['edicion']}'.",
                campo="edicion",
            )
        anio = datos["anio"] if datos["anio"] is not None else date.today().year
        referencia = ReferenciaCurso(
            nombre=fila.nombre_curso,
            anio=anio,
            edicion=datos["edicion"],
            mes=datos["mes"],
            tipo_curso=datos["tipo_curso"],
            origen=datos["origen"],
        )
        resuelto = self.resolvedor.resolver(referencia)
        if resuelto.creado:
            resultado.cursos_creados.append(resuelto.curso.nombre)
        return resuelto.curso

    def _asegurar_carpeta(self, curso) -> None:
        """Crea la carpeta del curso si aún no tiene. Cualquier fallo solo se registra."""
        if curso.carpeta_id:
            return
        try:
            carpeta = self.proveedor_carpetas.asegurar_carpeta(curso.id, curso.nombre, curso.anio)
            if carpeta:
                self.model_curso.update(curso.id, {"carpeta_id": carpeta})
                curso.carpeta_id = carpeta
        except Exception as e:
            logger.warning("No se pudo asegurar la carpeta del curso %s: %s", curso.id, e)

    # =========================================================================
    #  VALIDACIÓN
    # =========================================================================
    def _validar(self, fila: FilaNormalizada, columnas: List[str]) -> Dict[str, Any]:
        """
        Valida y convierte los campos de la fila.

        Raises:
            ErrorValidacionFila: Con el nombre de la columna y el valor problemático.
        """
        for campo in CAMPOS_OBLIGATORIOS:
            if not getattr(fila, campo):
                raise ErrorValidacionFila(
                    f"Falta el campo requerido: '{ETIQUETAS_CAMPOS[campo]}'. "
                    f"Columnas encontradas: {', '.join(str(c) for c in columnas) or '(ninguna)'}",
                    campo=campo,
                )

        if not fila.codigo_curso and not fila.nombre_curso:
            raise ErrorValidacionFila(
                f"Falta el curso: indique '{ETIQUETAS_CAMPOS['codigo_curso']}' o "
                f"'{ETIQUETAS_CAMPOS['nombre_curso']}'.",
                campo="nombre_curso",
            )

        anio = self._entero(fila.anio, "anio")
        if anio is not None and not ANIO_MINIMO <= anio <= ANIO_MAXIMO:
            raise ErrorValidacionFila(
                f"Año inválido: '{fila.anio}'. Debe ser un número entre {ANIO_MINIMO} y {ANIO_MAXIMO}.",
                campo="anio",
            )

        mes = self._entero(fila.mes, "mes")
        if mes is not None and not 1 <= mes <= 12:
            raise ErrorValidacionFila(f"Mes inválido: '{fila.mes}'. Debe estar entre 1 y 12.", campo="mes")

        edicion = self._entero(fila.edicion, "edicion")
        if edicion is not None and edicion < 1:
            raise ErrorValidacionFila(
                f"Edición inválida: '{fila.edicion}'. Debe ser un número mayor o igual a 1.", campo="edicion"
            )

        return {
            "nombre_completo": fila.nombre_completo.strip(),
            "anio": anio,
            "mes": mes,
            "edicion": edicion,
            "tipo_curso": self._tipo_curso(fila.tipo_curso),
            "origen": self._catalogo(fila.origen, ORIGENES, "origen"),
            "correo": Sanitizer.limpiar_correo(fila.correo),
            "telefono": Sanitizer.limpiar_celda(fila.telefono) or None,
            "fuente_contacto": self._catalogo(fila.fuente_contacto, FUENTES_CONTACTO, "fuente_contacto"),
            "estado_entrega": self._catalogo(fila.estado_entrega, ESTADOS_ENTREGA, "estado_entrega"),
        }

    @staticmethod
    def _entero(valor: Optional[str], campo: str) -> Optional[int]:
        try:
            return Sanitizer.limpiar_entero(valor)
        except ValueError:
            raise ErrorValidacionFila(
                f"Valor no numérico en '{ETIQUETAS_CAMPOS[campo]}': '{valor}'.", campo=campo
            ) from None

    @staticmethod
    def _catalogo(valor: Optional[str], permitidos: List[str], campo: str) -> Optional[str]:
        if not valor:
            return None
        normalizado = Sanitizer.a_valor_catalogo(valor)
        if normalizado not in permitidos:
            raise ErrorValidacionFila(
                f"Valor no reconocido en '{ETIQUETAS_CAMPOS[campo]}': '{valor}'. "
                f"Valores aceptados: {', '.join(permitidos)}.",
                campo=campo,
            )
        return normalizado

    @staticmethod
    def _tipo_curso(valor: Optional[str]) -> Optional[str]:
        if not valor:
            return None
        clave = Sanitizer.normalizar_encabezado(valor)
        for tipo in TIPOS_CURSO:
            if Sanitizer.normalizar_encabezado(tipo) == clave:
                return tipo
        raise ErrorValidacionFila(
            f"Valor no reconocido en '{ETIQUETAS_CAMPOS['tipo_curso']}': '{valor}'. "
            f"Valores aceptados: {', '.join(TIPOS_CURSO)}.",
            campo="tipo_curso",
        )
