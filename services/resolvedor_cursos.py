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
from typing import Optional, Union

from config.mappings import PALABRAS_VACIAS, LONGITUD_MAXIMA_INICIALES
from database import config
from database.schemas import ReferenciaCurso, CursoResuelto, NoEncontrado
from models.curso_model import CursoModel
from utilities.errores import ErrorAsignacionConcurrente
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# REGLAS DE COINCIDENCIA APROXIMADA
# ---------------------------------------------------------------------------
def coincide_exacta(consulta: str, candidato: str) -> bool:
    """Iguales tras normalizar (mayúsculas, espacios y separadores)."""
    clave = Sanitizer.normalizar_clave(consulta)
    return bool(clave) and clave == Sanitizer.normalizar_clave(candidato)


def coincide_permutacion(consulta: str, candidato: str) -> bool:
    """
    Año y edición escritos en orden inverso: "LM-2025-1" frente a "LM-1-2025".

    Ambos deben tener al menos tres segmentos y las mismas iniciales; se
    intercambian el segundo y el tercer segmento del candidato.
    """
    partes_consulta = consulta.upper().split("-")
    partes_candidato = candidato.upper().split("-")
    if len(partes_consulta) < 3 or len(partes_candidato) < 3:
        return False
    if partes_consulta[0] != partes_candidato[0]:
        return False
    permutado = [partes_candidato[0], partes_candidato[2], partes_candidato[1]] + partes_candidato[3:]
    return permutado == partes_consulta


def coincide_prefijo(consulta: str, candidato: str) -> bool:
    """Consulta de exactamente dos segmentos ("LM-2025") que inicia el código del candidato."""
    if len(consulta.split("-")) != 2:
        return False
    return candidato.upper().startswith(consulta.upper())


REGLAS_COINCIDENCIA = (
    ("exacta", coincide_exacta),
    ("permutacion", coincide_permutacion),
    ("prefijo", coincide_prefijo),
)
"""tuple: Reglas de la búsqueda aproximada, en orden de aplicación."""


class ResolvedorCursos:
    """
    Resuelve una referencia de curso a un registro de `Curso`.

    Con código explícito busca por clave primaria, luego por el campo
    `codigo` y por último con las reglas de `REGLAS_COINCIDENCIA`; nunca crea
    cursos. Con nombre + año busca por nombre normalizado dentro del año y,
    si no existe, crea el curso.
    """

    def __init__(self, model_curso: CursoModel | None = None, max_reintentos: int | None = None):
        self.model_curso = model_curso or CursoModel()
        self.max_reintentos = max_reintentos or config.MAX_REINTENTOS_ASIGNACION

    def resolver(self, referencia: ReferenciaCurso) -> Union[CursoResuelto, NoEncontrado]:
        """
        Args:
            referencia (ReferenciaCurso): Código explícito, o nombre y año.

        Returns:
            CursoResuelto | NoEncontrado: `NoEncontrado` solo se produce con
            código explícito.

        Raises:
            ValueError: Si la referencia no trae ni código ni nombre y año.
            ErrorAsignacionConcurrente: Si la creación del curso pierde la
                carrera en todos los intentos.
        """
        if referencia.es_explicita:
            return self.resolver_por_codigo(referencia.codigo)
        if referencia.nombre and referencia.anio is not None:
            return self.resolver_por_nombre(referencia)
        raise ValueError("La referencia de curso necesita un código o un nombre con año")

    # ----------------------------
    # POR CÓDIGO
    # ----------------------------
    def resolver_por_codigo(self, codigo: str) -> Union[CursoResuelto, NoEncontrado]:
        codigo = codigo.strip()

        # 1. Clave primaria
        curso = self.model_curso.get_by_id(codigo)
        if curso:
            return CursoResuelto(curso=curso, regla="id")

        # 2. Campo indexado
        por_campo = self.model_curso.buscar_por_codigo(codigo)
        if por_campo:
            return CursoResuelto(curso=por_campo[0], regla="campo_codigo")

        # 3. Búsqueda aproximada
        cursos = self.model_curso.todos_ordenados()
        for curso in cursos:
            candidatos = [c for c in (curso.id, curso.codigo) if c]
            for nombre_regla, regla in REGLAS_COINCIDENCIA:
                if any(regla(codigo, candidato) for candidato in candidatos):
                    logger.info("Curso '%s' resuelto como '%s' (regla %s)", codigo, curso.id, nombre_regla)
                    return CursoResuelto(curso=curso, regla=nombre_regla)

        reglas = ", ".join(nombre for nombre, _ in REGLAS_COINCIDENCIA)
        return NoEncontrado(
            referencia=codigo,
            mensaje=(
                f"No se encontró el curso con código '{codigo}'. Se buscó por ID del curso, "
                f"por el campo 'codigo' y de forma aproximada ({reglas}) entre {len(cursos)} cursos."
            ),
        )

    # ----------------------------
    # POR NOMBRE + AÑO
    # ----------------------------
    def buscar_por_nombre(self, nombre: str, anio: int):
        """Curso del año cuyo nombre normalizado coincide, o None."""
        clave = Sanitizer.normalizar_clave(nombre)
        for curso in self.model_curso.cursos_del_anio(anio):
            if Sanitizer.normalizar_clave(curso.nombre) == clave:
                return curso
        return None

    def resolver_por_nombre(self, referencia: ReferenciaCurso) -> CursoResuelto:
        """
        Busca el curso por nombre dentro del año; si no existe lo crea.

        La creación usa inserción condicional: si otro proceso crea el mismo
        código a la vez, se vuelve a buscar por nombre (puede ser el mismo curso)
        y, si no, se genera el siguiente código libre.
        """
        for intento in range(1, self.max_reintentos + 1):
            curso = self.buscar_por_nombre(referencia.nombre, referencia.anio)
            if curso:
                return CursoResuelto(curso=curso, regla="nombre")

            codigo = self.codigo_disponible(referencia.nombre, referencia.anio, referencia.edicion)
            datos = {
                "id": codigo,
                "codigo": codigo,
                "nombre": referencia.nombre.strip(),
                "tipo_curso": referencia.tipo_curso or "Curso",
                "anio": referencia.anio,
                "mes": referencia.mes,
                "edicion": referencia.edicion,
                "origen": referencia.origen or "nuevo",
                "estado": "active",
            }
            curso = self.model_curso.crear_si_no_existe(datos, clave="id")
            if curso is not None:
                logger.info("Curso creado: %s (%s)", curso.id, curso.nombre)
                return CursoResuelto(curso=curso, creado=True, regla="creado")
            logger.warning("El código de curso %s se creó en paralelo (intento %d)", codigo, intento)

        raise ErrorAsignacionConcurrente(
            f"No se pudo crear el curso '{referencia.nombre}' ({referencia.anio}) "
            f"tras {self.max_reintentos} intentos.",
            intentos=self.max_reintentos,
        )

    @staticmethod
    def iniciales(nombre: str) -> str:
        """
        Raíz del código de un curso nuevo a partir de su nombre.

        Se toman las iniciales de las palabras que no son vacías ("Taller de
        Liderazgo Moderno" -> "TLM"); con una sola palabra se usan sus primeras
        letras ("Oratoria" -> "ORAT").
        """
        palabras = [p for p in Sanitizer.limpiar_texto(nombre).split() if any(c.isalnum() for c in p)]
        significativas = [p for p in palabras if p not in PALABRAS_VACIAS] or palabras
        if not significativas:
            return "CUR"
        if len(significativas) == 1:
            letras = "".join(c for c in significativas[0] if c.isalnum())
            return letras[:LONGITUD_MAXIMA_INICIALES]
        iniciales = "".join(next(c for c in p if c.isalnum()) for p in significativas)
        return iniciales[:LONGITUD_MAXIMA_INICIALES]

    @staticmethod
    def componer_codigo(raiz: str, anio: int, edicion: Optional[int] = None) -> str:
        if edicion:
            return f"{raiz}-{edicion}-{anio}"
        return f"{raiz}-{anio}"

    def codigo_disponible(self, nombre: str, anio: int, edicion: Optional[int] = None) -> str:
        """Primer código libre: "TN-2025", luego "TN1-2025", "TN2-2025"..."""
        raiz = self.iniciales(nombre)
        codigo = self.componer_codigo(raiz, anio, edicion)
        contador = 1
        while self.model_curso.get_by_id(codigo) is not None:
            codigo = self.componer_codigo(f"{raiz}{contador}", anio, edicion)
            contador += 1
        return codigo
