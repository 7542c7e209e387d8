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
from typing import Dict, Iterable, List, Tuple

from config.mappings import COLUMNA_ALIAS
from database.schemas import FilaCruda, FilaNormalizada
from utilities.sanitizer import Sanitizer


class MapeadorEncabezados:
    """
    Traduce los encabezados libres de una hoja de cálculo a los campos canónicos.

    Cada campo de `COLUMNA_ALIAS` toma la primera columna no usada cuyo
    encabezado normalizado coincide con alguno de sus alias (o con el propio
    nombre del campo). Solo hay coincidencias exactas tras normalizar, para que
    "Nombre del Curso" nunca se confunda con "Nombre".
    """

    def __init__(self, alias: Dict[str, List[str]] | None = None):
        alias = alias or COLUMNA_ALIAS
        self._alias = {
            campo: {Sanitizer.normalizar_encabezado(a) for a in lista} | {Sanitizer.normalizar_encabezado(campo)}
            for campo, lista in alias.items()
        }
        self._cache: Dict[Tuple[str, ...], Dict[str, str]] = {}

    def mapear_columnas(self, encabezados: Iterable) -> Dict[str, str]:
        """
        Identifica qué columna corresponde a cada campo.

        Args:
            encabezados (Iterable): Encabezados tal como aparecen en el archivo.

        Returns:
            Dict[str, str]: {campo_canónico: encabezado_original}.
        """
        encabezados = [str(e) for e in encabezados]
        clave = tuple(encabezados)
        if clave in self._cache:
            return self._cache[clave]

        normalizados = {e: Sanitizer.normalizar_encabezado(e) for e in encabezados}
        usados = set()
        mapa = {}
        for campo, alias in self._alias.items():
            for encabezado in encabezados:
                if encabezado in usados:
                    continue
                if normalizados[encabezado] in alias:
                    mapa[campo] = encabezado
                    usados.add(encabezado)
                    break

        self._cache[clave] = mapa
        return mapa

    def normalizar(self, fila: FilaCruda) -> FilaNormalizada:
        """
        Convierte una fila cruda en una fila tipada con los campos canónicos.

        Las celdas vacías quedan como None.
        """
        celdas = {str(k): v for k, v in fila.celdas.items() if k is not None}
        mapa = self.mapear_columnas(celdas.keys())
        valores = {}
        for campo, encabezado in mapa.items():
            valores[campo] = Sanitizer.limpiar_celda(celdas.get(encabezado)) or None

        asignadas = set(mapa.values())
        ignoradas = [e for e in celdas if e not in asignadas]
        return FilaNormalizada(numero=fila.numero, columnas_ignoradas=ignoradas, **valores)
