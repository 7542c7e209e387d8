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

"""Utilidades compartidas por las pruebas: almacén SQLite en memoria y carpetas falsas."""
import sys
from pathlib import Path

# Hace importables los paquetes del proyecto al ejecutar desde tests/
RAIZ_PROYECTO = Path(__file__).resolve().parent.parent
if str(RAIZ_PROYECTO) not in sys.path:
    sys.path.insert(0, str(RAIZ_PROYECTO))

from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from database import models  # noqa: E402,F401
from database.conexion import Base, crear_fabrica_sesiones  # noqa: E402
from models.certificado_model import CertificadoModel  # noqa: E402
from models.curso_model import CursoModel  # noqa: E402
from utilities.errores import AdvertenciaAprovisionamiento  # noqa: E402


def crear_almacen_memoria():
    """Motor SQLite en memoria con el esquema creado y su fábrica de sesiones."""
    engine = create_engine(
        "sqlite://", poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    Base.metadata.create_all(engine)
    return engine, crear_fabrica_sesiones(engine)


class AlmacenPrueba:
    """Agrupa los modelos CRUD de una base en memoria y atajos para poblarla."""

    def __init__(self):
        self.engine, self.fabrica = crear_almacen_memoria()
        self.cursos = CursoModel(self.fabrica)
        self.certificados = CertificadoModel(self.fabrica)

    def cerrar(self):
        self.engine.dispose()

    def curso(self, curso_id, nombre, anio, **extra):
        datos = {"id": curso_id, "codigo": curso_id, "nombre": nombre, "anio": anio}
        datos.update(extra)
        return self.cursos.create(datos)

    def certificado(self, curso, codigo, nombre_completo, **extra):
        datos = {
            "curso_id": curso.id,
            "codigo": codigo,
            "nombre_completo": nombre_completo,
            "nombre_curso": curso.nombre,
            "anio": curso.anio,
        }
        datos.update(extra)
        return self.certificados.create(datos)

    def codigos(self):
        return sorted(c.codigo for c in self.certificados.get_all())


class ProveedorFalso:
    """Registra las carpetas pedidas sin tocar el disco."""

    def __init__(self):
        self.llamadas = []

    def asegurar_carpeta(self, curso_id, nombre_curso, anio):
        self.llamadas.append((curso_id, nombre_curso, anio))
        return f"/carpetas/{anio}/{curso_id}"


class ProveedorRoto:
    """Falla siempre, como una unidad de red no disponible."""

    def asegurar_carpeta(self, curso_id, nombre_curso, anio):
        raise AdvertenciaAprovisionamiento(f"Sin acceso a la carpeta de {curso_id}")
