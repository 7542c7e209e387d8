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

from database.base_model import BaseCRUDModel, traducir_errores
from database.models import Curso, Certificado


class CursoModel(BaseCRUDModel):
    """Modelo CRUD para la gestión de Cursos."""
    model = Curso

    def buscar_por_codigo(self, codigo: str):
        """Cursos cuyo campo indexado `codigo` es exactamente el valor dado.

        Args:
            codigo (str): Código tal como llega.

        Returns:
            list: Cursos que coinciden (normalmente uno o ninguno).
        """
        return self.consultar("codigo", "==", codigo, order_by=Curso.id)

    def cursos_del_anio(self, anio: int):
        """Recupera los cursos de un año, ordenados por código."""
        return self.consultar("anio", "==", anio, order_by=Curso.id)

    def todos_ordenados(self):
        """Todos los cursos ordenados por código, para la búsqueda aproximada."""
        return self.get_all(order_by=Curso.id)

    @traducir_errores
    def certificados_emitidos(self, curso_id: str) -> int:
        """Cuenta los certificados que referencian un curso.

        Args:
            curso_id (str): ID del curso.

        Returns:
            int: Cantidad de certificados del curso.
        """
        with self._get_session() as session:
            return session.query(Certificado).filter(Certificado.curso_id == curso_id).count()

    def archivar(self, curso_id: str):
        """Marca un curso como archivado (borrado lógico)."""
        return self.update(curso_id, {"estado": "archived"})
