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
import re
import unicodedata
import pandas as pd
from typing import Any, Optional

_PARENTESIS = re.compile(r"\s*\([^)]*\)")
_NO_ALFANUMERICO = re.compile(r"[^\w\s]|_")
_ESPACIOS = re.compile(r"\s+")


class Sanitizer:
    """Clase utilitaria estática para limpieza y normalización de datos."""

    @staticmethod
    def es_vacio(valor: Any) -> bool:
        """
        Indica si una celda debe tratarse como vacía (None, NaN, NaT o solo espacios).

        Args:
            valor (Any): Valor de entrada.

        Returns:
            bool: True si no hay contenido útil.
        """
        if valor is None:
            return True
        try:
            if pd.isna(valor):
                return True
        except (TypeError, ValueError):
            # pd.isna sobre colecciones devuelve un arreglo
            return False
        return str(valor).strip() == ""

    @staticmethod
    def limpiar_texto(texto: Any) -> str:
        """
        Normaliza texto eliminando acentos y caracteres especiales, manteniendo la Ñ.
        Convierte a mayúsculas.

        Args:
            texto (Any): Texto de entrada.

        Returns:
            str: Texto limpio y en mayúsculas.
        """
        if Sanitizer.es_vacio(texto):
            return ""

        txt = str(texto).strip()
        # Protección de la Ñ
        txt = txt.replace("ñ", "__ENYE__").replace("Ñ", "__ENYE_MAYUS__")

        # Normalización unicode (eliminar tildes)
        txt = unicodedata.normalize("NFD", txt)
        txt = "".join(c for c in txt if unicodedata.category(c) != "Mn")

        # Restauración de la Ñ y mayúsculas
        txt = txt.replace("__ENYE__", "ñ").replace("__ENYE_MAYUS__", "Ñ")
        return txt.upper()

    @staticmethod
    def normalizar_clave(texto: Any) -> str:
        """
        Convierte una referencia cruda (código o nombre de curso) en una clave comparable.

        Pasa a minúsculas, elimina el contenido entre paréntesis, descarta la
        puntuación (incluidos guiones y guion bajo), colapsa los espacios y recorta.
        Es total y idempotente: normalizar_clave(normalizar_clave(x)) == normalizar_clave(x).

        Args:
            texto (Any): Texto de entrada; None o NaN producen "".

        Returns:
            str: Clave normalizada.
        """
        if Sanitizer.es_vacio(texto):
            return ""
        txt = str(texto).lower()
        txt = _PARENTESIS.sub("", txt)
        txt = _NO_ALFANUMERICO.sub("", txt)
        return _ESPACIOS.sub(" ", txt).strip()

    @staticmethod
    def normalizar_encabezado(encabezado: Any) -> str:
        """
        Clave de comparación para encabezados de hoja de cálculo.

        Igual que `normalizar_clave`, pero eliminando antes las tildes para que
        "Edición", "Edicion" y "EDICIÓN (opcional)" coincidan.
        """
        return Sanitizer.normalizar_clave(Sanitizer.limpiar_texto(encabezado))

    @staticmethod
    def limpiar_celda(valor: Any) -> str:
        """
        Convierte una celda en texto recortado. Los números enteros leídos como
        float por pandas (ej: 2025.0) se devuelven sin decimales.

        Args:
            valor (Any): Valor de entrada.

        Returns:
            str: Texto de la celda o "" si está vacía.
        """
        if Sanitizer.es_vacio(valor):
            return ""
        if isinstance(valor, float) and valor.is_integer():
            return str(int(valor))
        return str(valor).strip()

    @staticmethod
    def limpiar_entero(valor: Any) -> Optional[int]:
        """
        Interpreta una celda como entero ("2025", "2025.0", 2025.0).

        Returns:
            int | None: El entero, o None si la celda está vacía.

        Raises:
            ValueError: Si la celda tiene contenido no numérico.
        """
        txt = Sanitizer.limpiar_celda(valor)
        if not txt:
            return None
        if re.fullmatch(r"\d+\.0+", txt):
            txt = txt.split(".")[0]
        return int(txt)

    @staticmethod
    def limpiar_correo(valor: Any) -> Optional[str]:
        """Correo recortado y en minúsculas, o None si la celda está vacía."""
        txt = Sanitizer.limpiar_celda(valor)
        return txt.lower() if txt else None

    @staticmethod
    def a_valor_catalogo(valor: Any) -> str:
        """
        Normaliza un valor de catálogo escrito a mano ("Listo para entrega",
        "listo_para_entrega", "LISTO PARA ENTREGA") a su forma canónica en
        minúsculas con guiones bajos.
        """
        txt = Sanitizer.limpiar_texto(valor).lower()
        txt = re.sub(r"[\s\-]+", "_", txt)
        return txt.strip("_")
