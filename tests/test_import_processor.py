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

import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

import pandas as pd

from entorno_prueba import AlmacenPrueba, ProveedorFalso

from controllers.import_processor import ExcelEngine, ProcesadorImportacion
from services.conciliador_importacion import ConciliadorImportacion
from utilities.errores import ErrorImportacion


class TestExcelEngine(unittest.TestCase):
    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def escribir(self, nombre, contenido):
        ruta = self.tmp / nombre
        ruta.write_text(contenido, encoding="utf-8")
        return str(ruta)

    def test_csv_con_punto_y_coma(self):
        ruta = self.escribir("lote.csv", "Nombre Completo;ID del Curso\nAna Ruiz;LM-2025\n;\nLuis Paz;LM-2025\n")
        filas = ExcelEngine(ruta).filas()

        self.assertEqual([f.numero for f in filas], [2, 4])
        self.assertEqual(filas[0].celdas, {"Nombre Completo": "Ana Ruiz", "ID del Curso": "LM-2025"})

    def test_csv_con_comas(self):
        ruta = self.escribir("lote.csv", "Nombre Completo,Año\nAna,2025\n")
        filas = ExcelEngine(ruta).filas()
        self.assertEqual(filas[0].celdas, {"Nombre Completo": "Ana", "Año": "2025"})

    def test_csv_con_linea_en_blanco_conserva_la_numeracion(self):
        ruta = self.escribir("lote.csv", "Nombre Completo,ID del Curso\nAna,LM-2025\n\nLuis,LM-2025\n")
        filas = ExcelEngine(ruta).filas()

        self.assertEqual([f.numero for f in filas], [2, 4])
        self.assertEqual(filas[1].celdas, {"Nombre Completo": "Luis", "ID del Curso": "LM-2025"})

    def test_celdas_vacias_son_none(self):
        ruta = self.escribir("lote.csv", "Nombre Completo,Email\nAna,\n")
        self.assertIsNone(ExcelEngine(ruta).filas()[0].celdas["Email"])

    def test_xlsx(self):
        ruta = str(self.tmp / "lote.xlsx")
        pd.DataFrame({"Nombre Completo": ["Ana", "Luis"], "Año": [2025, 2025]}).to_excel(ruta, index=False)
        filas = ExcelEngine(ruta).filas()
        self.assertEqual([f.numero for f in filas], [2, 3])
        self.assertEqual(filas[1].celdas["Nombre Completo"], "Luis")

    def test_extension_no_soportada(self):
        ruta = self.escribir("lote.txt", "Nombre Completo\nAna\n")
        with self.assertRaises(ErrorImportacion):
            ExcelEngine(ruta).cargar()


class TestProcesadorImportacion(unittest.TestCase):
    def setUp(self):
        self._tmp = TemporaryDirectory()
        self.tmp = Path(self._tmp.name)
        self.almacen = AlmacenPrueba()
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        conciliador = ConciliadorImportacion(
            model_curso=self.almacen.cursos,
            model_certificado=self.almacen.certificados,
            proveedor_carpetas=ProveedorFalso(),
        )
        self.procesador = ProcesadorImportacion(conciliador)

    def tearDown(self):
        self.almacen.cerrar()
        self._tmp.cleanup()

    def test_importa_archivo_csv(self):
        ruta = self.tmp / "lote.csv"
        ruta.write_text(
            "Nombre Completo;ID del Curso;Año\nAna Ruiz;LM-2025;2025\nLuis Paz;ZZ-2025;2025\n", encoding="utf-8"
        )
        resultado = self.procesador.importar_archivo(str(ruta))

        self.assertEqual(resultado.exitosos, 1)
        self.assertEqual(resultado.errores[0].fila, 3)
        self.assertEqual(self.almacen.codigos(), ["LM-2025-01"])

    def test_archivo_inexistente(self):
        with self.assertRaises(ErrorImportacion):
            self.procesador.importar_archivo(str(self.tmp / "no_existe.xlsx"))

    def test_archivo_sin_filas(self):
        ruta = self.tmp / "vacio.csv"
        ruta.write_text("Nombre Completo;ID del Curso\n", encoding="utf-8")
        with self.assertRaises(ErrorImportacion):
            self.procesador.importar_archivo(str(ruta))


if __name__ == "__main__":
    unittest.main()
