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

from sqlalchemy import inspect

from database.conexion import engine as engine_defecto, Base
# Registrar las tablas en Base.metadata
from database import models  # noqa: F401

logger = logging.getLogger(__name__)


def inicializar_base_de_datos(engine=None) -> bool:
    """
    Crea la estructura de la base de datos si no existe.

    Args:
        engine (Engine, optional): Motor a inicializar; por defecto el configurado.

    Returns:
        bool: True si las tablas quedaron disponibles.
    """
    engine = engine or engine_defecto
    logger.info("Inicializando base de datos (%s)...", engine.dialect.name)

    try:
        Base.metadata.create_all(bind=engine)
    except Exception:
        logger.exception("Error crítico creando tablas")
        return False

    tablas = inspect(engine).get_table_names()
    faltantes = [t for t in Base.metadata.tables if t not in tablas]
    if faltantes:
        logger.error("Tablas no creadas: %s", ", ".join(faltantes))
        return False

    logger.info("Estructura de tablas verificada/creada.")
    return True
