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

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Optional, Any


@dataclass
class FilaCruda:
    """
    Fila tal como llega de la hoja de cálculo: encabezado original -> celda.
    `numero` es la fila del archivo (la 1 es el encabezado, los datos empiezan en la 2).
    """
    numero: int
    celdas: Dict[str, Any] = field(default_factory=dict)


@dataclass
class FilaNormalizada:
    """
    Fila ya mapeada a los campos canónicos del sistema. Cada campo es texto
    limpio o None si la columna no existe o la celda está vacía.
    """
    numero: int
    nombre_completo: Optional[str] = None
    codigo_curso: Optional[str] = None
    nombre_curso: Optional[str] = None
    anio: Optional[str] = None
    mes: Optional[str] = None
    edicion: Optional[str] = None
    tipo_curso: Optional[str] = None
    origen: Optional[str] = None
    correo: Optional[str] = None
    telefono: Optional[str] = None
    fuente_contacto: Optional[str] = None
    estado_entrega: Optional[str] = None

    # Encabezados originales que no se asignaron a ningún campo
    columnas_ignoradas: List[str] = field(default_factory=list)


@dataclass
class ReferenciaCurso:
    """
    Referencia a un curso: por código explícito, o por nombre + año.
    `edicion`, `mes`, `tipo_curso` y `origen` solo se usan si hay que crear el curso.
    """
    codigo: Optional[str] = None
    nombre: Optional[str] = None
    anio: Optional[int] = None
    edicion: Optional[int] = None
    mes: Optional[int] = None
    tipo_curso: Optional[str] = None
    origen: Optional[str] = None

    @property
    def es_explicita(self) -> bool:
        return bool(self.codigo and self.codigo.strip())


@dataclass
class CursoResuelto:
    """Resultado positivo de la resolución. `regla` indica cómo se encontró."""
    curso: Any
    creado: bool = False
    regla: str = "id"


@dataclass
class NoEncontrado:
    """Resultado negativo de la resolución por código explícito (no es una excepción)."""
    referencia: str
    mensaje: str


@dataclass
class ErrorFila:
    """Diagnóstico de una fila rechazada, con la numeración del archivo original."""
    fila: int
    mensaje: str


@dataclass
class ResultadoImportacion:
    """Resumen final de una importación masiva de certificados."""
    exitosos: int = 0                # Filas que terminaron en inserción o actualización
    insertados: int = 0              # Certificados nuevos
    actualizados: int = 0            # Certificados existentes actualizados en sitio
    cursos_creados: List[str] = field(default_factory=list)  # Nombres de cursos creados
    errores: List[ErrorFila] = field(default_factory=list)

    def a_dict(self) -> Dict[str, Any]:
        """Estructura serializable sin referencias a objetos internos."""
        return asdict(self)
