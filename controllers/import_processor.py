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
import os
from typing import List

import pandas as pd

from database.schemas import FilaCruda, ResultadoImportacion
from services.conciliador_importacion import ConciliadorImportacion
from utilities.errores import ErrorImportacion
from utilities.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

MOTORES_EXCEL = {
    ".xlsx": "openpyxl",
    ".xlsm": "openpyxl",
    ".xls": "xlrd",
    ".ods": "odf",
}


class ExcelEngine:
    """Motor de carga de archivos de hoja de cálculo (Excel/ODS/CSV).

    Se encarga de leer el archivo físico y entregar sus filas de datos como
    `FilaCruda`, conservando los encabezados originales. El mapeo de columnas
    lo hace después el conciliador.
    """

    def __init__(self, filepath: str):
        """Inicializa el motor con la ruta del archivo.

        Args:
            filepath (str): Ruta al archivo .xlsx, .xls, .ods o .csv.
        """
        self.filepath = filepath
        self.df = None

    def _leer_csv(self) -> pd.DataFrame:
        # Las exportaciones en español suelen usar ';' como separador
        with open(self.filepath, encoding="utf-8-sig") as archivo:
            primera_linea = archivo.readline()
        separador = ";" if ";" in primera_linea else ","
        return pd.read_csv(
            self.filepath, sep=separador, dtype=str, keep_default_na=False,
            skip_blank_lines=False, encoding="utf-8-sig",
        )

    def cargar(self) -> pd.DataFrame:
        """Carga el archivo en un DataFrame de pandas.

        Returns:
            pd.DataFrame: Contenido de la primera hoja.

        Raises:
            ErrorImportacion: Si la extensión no es soportada o el archivo no se puede leer.
        """
        extension = os.path.splitext(self.filepath)[1].lower()
        try:
            if extension == ".csv":
                self.df = self._leer_csv()
            elif extension in MOTORES_EXCEL:
                self.df = pd.read_excel(self.filepath, engine=MOTORES_EXCEL[extension], dtype=object)
            else:
                raise ErrorImportacion(
                    f"Formato no soportado: '{extension or self.filepath}'. "
                    f"Use {', '.join(sorted(MOTORES_EXCEL))} o .csv."
                )
        except ErrorImportacion:
            raise
        except Exception as e:
            raise ErrorImportacion(f"No se pudo leer el archivo {self.filepath}: {e}") from e

        self.df.columns = [str(col).strip() for col in self.df.columns]
        logger.info("Archivo %s cargado: %d filas, %d columnas", self.filepath, len(self.df), len(self.df.columns))
        return self.df

    def filas(self) -> List[FilaCruda]:
        """Convierte el DataFrame en filas crudas numeradas como en el archivo.

        Las filas completamente vacías se omiten, pero no alteran la numeración.

        Returns:
            List[FilaCruda]: Una por fila de datos; la primera es la fila 2.
        """
        if self.df is None:
            self.cargar()

        filas = []
        for idx, row in self.df.iterrows():
            celdas = {col: (None if Sanitizer.es_vacio(valor) else valor) for col, valor in row.items()}
            if all(valor is None for valor in celdas.values()):
                continue
            filas.append(FilaCruda(numero=int(idx) + 2, celdas=celdas))
        return filas


class ProcesadorImportacion:
    """Coordina la lectura de un archivo y su conciliación con la base de datos."""

    def __init__(self, conciliador: ConciliadorImportacion | None = None):
        self.conciliador = conciliador or ConciliadorImportacion()

    def importar_archivo(self, filepath: str) -> ResultadoImportacion:
        """Importa todas las filas de un archivo de certificados.

        Args:
            filepath (str): Ruta del archivo.

        Returns:
            ResultadoImportacion: Resumen de la importación.

        Raises:
            ErrorImportacion: Si el archivo no existe, no se puede leer o no tiene filas.
        """
        if not os.path.isfile(filepath):
            raise ErrorImportacion(f"No existe el archivo: {filepath}")

        motor = ExcelEngine(filepath)
        motor.cargar()
        filas = motor.filas()
        if not filas:
            raise ErrorImportacion(f"El archivo {filepath} no contiene filas de datos.")

        return self.conciliador.importar_lote(filas)
