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

from utilities.sanitizer import Sanitizer


class TestNormalizarClave(unittest.TestCase):
    def test_quita_parentesis_puntuacion_y_espacios(self):
        self.assertEqual(Sanitizer.normalizar_clave("  Liderazgo   Moderno (2025) "), "liderazgo moderno")
        self.assertEqual(Sanitizer.normalizar_clave("LM-2025"), "lm2025")
        self.assertEqual(Sanitizer.normalizar_clave("Taller_de-Oratoria!"), "tallerdeoratoria")

    def test_valores_vacios(self):
        self.assertEqual(Sanitizer.normalizar_clave(None), "")
        self.assertEqual(Sanitizer.normalizar_clave(float("nan")), "")
        self.assertEqual(Sanitizer.normalizar_clave("   "), "")

    def test_acepta_cualquier_objeto(self):
        self.assertEqual(Sanitizer.normalizar_clave(2025), "2025")

    def test_idempotente(self):
        muestras = ["LM-2025-01", "  Curso (viejo)  de   Ética ", "A_B-C.D", "(solo paréntesis)", "ñandú"]
        for muestra in muestras:
            una_vez = Sanitizer.normalizar_clave(muestra)
            self.assertEqual(Sanitizer.normalizar_clave(una_vez), una_vez, muestra)


class TestEncabezadosYCeldas(unittest.TestCase):
    def test_encabezado_sin_tildes(self):
        self.assertEqual(Sanitizer.normalizar_encabezado("Edición"), "edicion")
        self.assertEqual(Sanitizer.normalizar_encabezado("AÑO (YYYY)"), Sanitizer.normalizar_encabezado("Año"))

    def test_celda_entera_leida_como_float(self):
        self.assertEqual(Sanitizer.limpiar_celda(2025.0), "2025")
        self.assertEqual(Sanitizer.limpiar_celda("  texto "), "texto")
        self.assertEqual(Sanitizer.limpiar_celda(None), "")

    def test_limpiar_entero(self):
        self.assertEqual(Sanitizer.limpiar_entero("2025.0"), 2025)
        self.assertEqual(Sanitizer.limpiar_entero(3), 3)
        self.assertIsNone(Sanitizer.limpiar_entero(""))
        with self.assertRaises(ValueError):
            Sanitizer.limpiar_entero("dos mil")

    def test_valor_catalogo(self):
        self.assertEqual(Sanitizer.a_valor_catalogo("Listo para entrega"), "listo_para_entrega")
        self.assertEqual(Sanitizer.a_valor_catalogo("Retiro-Presencial"), "retiro_presencial")
        self.assertEqual(Sanitizer.a_valor_catalogo("Inscripción"), "inscripcion")

    def test_correo_en_minusculas(self):
        self.assertEqual(Sanitizer.limpiar_correo(" Ana@Correo.COM "), "ana@correo.com")
        self.assertIsNone(Sanitizer.limpiar_correo(""))


if __name__ == "__main__":
    unittest.main()
