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

from entorno_prueba import AlmacenPrueba

from database.schemas import ReferenciaCurso, CursoResuelto, NoEncontrado
from models.curso_model import CursoModel
from services.resolvedor_cursos import (
    ResolvedorCursos, coincide_exacta, coincide_permutacion, coincide_prefijo
)
from utilities.errores import ErrorAsignacionConcurrente


class ModeloCursoCiego(CursoModel):
    """No ve ningún curso por clave primaria, como un proceso con lectura atrasada."""

    def get_by_id(self, obj_id):
        return None


class TestReglas(unittest.TestCase):
    def test_exacta(self):
        self.assertTrue(coincide_exacta("lm_2025", "LM-2025"))
        self.assertFalse(coincide_exacta("", ""))

    def test_permutacion(self):
        self.assertTrue(coincide_permutacion("LM-2025-1", "LM-1-2025"))
        self.assertTrue(coincide_permutacion("lm-2025-1", "LM-1-2025"))
        self.assertFalse(coincide_permutacion("XX-2025-1", "LM-1-2025"))
        self.assertFalse(coincide_permutacion("LM-2025", "LM-1-2025"))

    def test_prefijo_solo_con_dos_segmentos(self):
        self.assertTrue(coincide_prefijo("TL-2025", "TL-2025-2"))
        self.assertFalse(coincide_prefijo("TL", "TL-2025"))
        self.assertFalse(coincide_prefijo("TL-2025-2", "TL-2025-2-B"))


class TestResolverPorCodigo(unittest.TestCase):
    def setUp(self):
        self.almacen = AlmacenPrueba()
        self.resolvedor = ResolvedorCursos(self.almacen.cursos)

    def tearDown(self):
        self.almacen.cerrar()

    def test_clave_primaria(self):
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo=" LM-2025 "))
        self.assertIsInstance(resuelto, CursoResuelto)
        self.assertEqual((resuelto.curso.id, resuelto.regla), ("LM-2025", "id"))

    def test_campo_codigo_de_registro_antiguo(self):
        self.almacen.cursos.create({"id": "C000123", "codigo": "LM-2025", "nombre": "Liderazgo Moderno", "anio": 2025})
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo="LM-2025"))
        self.assertEqual((resuelto.curso.id, resuelto.regla), ("C000123", "campo_codigo"))

    def test_exacta_ignora_mayusculas(self):
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo="lm-2025"))
        self.assertEqual((resuelto.curso.id, resuelto.regla), ("LM-2025", "exacta"))

    def test_anio_y_edicion_invertidos(self):
        self.almacen.curso("LM-1-2025", "Liderazgo Moderno", 2025, edicion=1)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo="LM-2025-1"))
        self.assertEqual((resuelto.curso.id, resuelto.regla), ("LM-1-2025", "permutacion"))

    def test_prefijo(self):
        self.almacen.curso("TL-2025-2", "Taller de Lectura", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo="TL-2025"))
        self.assertEqual((resuelto.curso.id, resuelto.regla), ("TL-2025-2", "prefijo"))

    def test_raiz_sola_no_coincide(self):
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(codigo="LM"))
        self.assertIsInstance(resuelto, NoEncontrado)
        self.assertIn("'LM'", resuelto.mensaje)
        self.assertIn("permutacion", resuelto.mensaje)

    def test_codigo_explicito_nunca_crea(self):
        self.resolvedor.resolver(ReferenciaCurso(codigo="ZZ-2025"))
        self.assertEqual(self.almacen.cursos.count(), 0)


class TestResolverPorNombre(unittest.TestCase):
    def setUp(self):
        self.almacen = AlmacenPrueba()
        self.resolvedor = ResolvedorCursos(self.almacen.cursos)

    def tearDown(self):
        self.almacen.cerrar()

    def test_encuentra_por_nombre_normalizado(self):
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(nombre="  liderazgo   moderno ", anio=2025))
        self.assertEqual((resuelto.curso.id, resuelto.creado, resuelto.regla), ("LM-2025", False, "nombre"))

    def test_otro_anio_crea_curso(self):
        self.almacen.curso("LM-2025", "Liderazgo Moderno", 2025)
        resuelto = self.resolvedor.resolver(ReferenciaCurso(nombre="Liderazgo Moderno", anio=2026))
        self.assertTrue(resuelto.creado)
        self.assertEqual(resuelto.curso.id, "LM-2026")
        self.assertEqual(resuelto.curso.codigo, "LM-2026")
        self.assertEqual(resuelto.curso.estado, "active")
        self.assertEqual(resuelto.curso.origen, "nuevo")

    def test_crea_con_edicion(self):
        resuelto = self.resolvedor.resolver(ReferenciaCurso(nombre="Taller Nuevo", anio=2025, edicion=2, mes=5))
        self.assertEqual(resuelto.curso.id, "TN-2-2025")
        self.assertEqual((resuelto.curso.edicion, resuelto.curso.mes), (2, 5))

    def test_colision_de_iniciales(self):
        self.almacen.curso("TN-2025", "Taller Nuevo", 2025)
        primero = self.resolvedor.resolver(ReferenciaCurso(nombre="Técnicas Nuevas", anio=2025))
        segundo = self.resolvedor.resolver(ReferenciaCurso(nombre="Tendencias Notables", anio=2025))
        self.assertEqual(primero.curso.id, "TN1-2025")
        self.assertEqual(segundo.curso.id, "TN2-2025")

    def test_sin_codigo_ni_anio(self):
        with self.assertRaises(ValueError):
            self.resolvedor.resolver(ReferenciaCurso(nombre="Taller Nuevo"))

    def test_carrera_perdida_en_todos_los_intentos(self):
        self.almacen.curso("TN-2025", "Taller Nuevo", 2025)
        resolvedor = ResolvedorCursos(ModeloCursoCiego(self.almacen.fabrica), max_reintentos=2)
        with self.assertLogs("services.resolvedor_cursos", level="WARNING"):
            with self.assertRaises(ErrorAsignacionConcurrente):
                resolvedor.resolver(ReferenciaCurso(nombre="Técnicas Nuevas", anio=2025))


class TestIniciales(unittest.TestCase):
    def test_descarta_palabras_vacias(self):
        self.assertEqual(ResolvedorCursos.iniciales("Taller de Liderazgo Moderno"), "TLM")

    def test_una_sola_palabra(self):
        self.assertEqual(ResolvedorCursos.iniciales("Oratoria"), "ORAT")

    def test_maximo_cuatro_letras_sin_tildes(self):
        self.assertEqual(
            ResolvedorCursos.iniciales("Gestión de la Calidad en Educación Superior Avanzada"), "GCES"
        )
        self.assertEqual(ResolvedorCursos.iniciales("Ética Aplicada"), "EA")


if __name__ == "__main__":
    unittest.main()
