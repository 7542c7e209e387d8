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

import entorno_prueba  # noqa: F401

from database.schemas import FilaCruda
from utilities.mapeo_columnas import MapeadorEncabezados


class TestMapeadorEncabezados(unittest.TestCase):
    def setUp(self):
        self.mapeador = MapeadorEncabezados()

    def test_sinonimos_en_espanol(self):
        mapa = self.mapeador.mapear_columnas(["Nombre Completo", "ID del Curso", "AÑO (YYYY)", "Observaciones"])
        self.assertEqual(mapa["nombre_completo"], "Nombre Completo")
        self.assertEqual(mapa["codigo_curso"], "ID del Curso")
        self.assertEqual(mapa["anio"], "AÑO (YYYY)")
        self.assertNotIn("nombre_curso", mapa)

    def test_encabezados_en_snake_case(self):
        mapa = self.mapeador.mapear_columnas(["full_name", "course_id", "course_name", "delivery_status"])
        self.assertEqual(mapa, {
            "nombre_completo": "full_name",
            "codigo_curso": "course_id",
            "nombre_curso": "course_name",
            "estado_entrega": "delivery_status",
        })

    def test_nombre_del_curso_no_se_confunde_con_nombre(self):
        mapa = self.mapeador.mapear_columnas(["Nombre del Curso", "Nombre"])
        self.assertEqual(mapa["nombre_curso"], "Nombre del Curso")
        self.assertEqual(mapa["nombre_completo"], "Nombre")

    def test_normalizar_fila(self):
        fila = FilaCruda(numero=5, celdas={
            "Nombre": " Ana Ruiz ",
            "Año": 2025.0,
            "Email": None,
            "Notas": "x",
        })
        normalizada = self.mapeador.normalizar(fila)
        self.assertEqual(normalizada.numero, 5)
        self.assertEqual(normalizada.nombre_completo, "Ana Ruiz")
        self.assertEqual(normalizada.anio, "2025")
        self.assertIsNone(normalizada.correo)
        self.assertIsNone(normalizada.codigo_curso)
        self.assertEqual(normalizada.columnas_ignoradas, ["Notas"])


if __name__ == "__main__":
    unittest.main()
