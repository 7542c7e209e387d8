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

"""Jerarquía de errores del motor de certificados.

Los errores de fila (`ErrorValidacionFila`, `CursoNoEncontrado`,
`ErrorAsignacionConcurrente`, `ErrorAlmacen`) se capturan dentro de la
importación y se convierten en diagnósticos por fila. `ErrorImportacion` es el
único que detiene un lote completo.
"""


class ErrorGestion(Exception):
    """Base de todos los errores propios de la aplicación."""


class ErrorAlmacen(ErrorGestion):
    """Fallo del almacén de datos (conexión, restricción, disponibilidad)."""


class ErrorValidacionFila(ErrorGestion):
    """Un campo obligatorio falta o tiene un formato inválido en una fila."""

    def __init__(self, mensaje: str, campo: str | None = None):
        super().__init__(mensaje)
        self.campo = campo


class CursoNoEncontrado(ErrorGestion):
    """Una referencia explícita de curso no se resolvió por ninguna estrategia."""


class ErrorAsignacionConcurrente(ErrorGestion):
    """La asignación de código o la creación de curso perdió la carrera tras los reintentos."""

    def __init__(self, mensaje: str, intentos: int = 0):
        super().__init__(mensaje)
        self.intentos = intentos


class AdvertenciaAprovisionamiento(ErrorGestion):
    """La carpeta del curso no pudo crearse. Nunca llega a ser un error de fila."""


class ErrorValidacionCurso(ErrorGestion):
    """Datos inválidos al crear un curso desde administración."""

    def __init__(self, errores: list[str]):
        super().__init__("; ".join(errores))
        self.errores = errores


class ErrorImportacion(ErrorGestion):
    """La entrada del lote es inválida en sí misma (no es una lista de filas)."""
