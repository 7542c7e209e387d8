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

from database.base_model import BaseCRUDModel
from database.models import Certificado

# Carácter más alto del plano básico; cierra la consulta "empieza por"
CENTINELA_RANGO = "\uffff"


class CertificadoModel(BaseCRUDModel):
    """Modelo CRUD para certificados emitidos."""
    model = Certificado

    def codigos_con_prefijo(self, prefijo: str) -> list[str]:
        """Devuelve los códigos de certificado que empiezan por `prefijo`.

        Args:
            prefijo (str): Prefijo de alcance, ej. "LM-2025-".

        Returns:
            list[str]: Códigos encontrados, en orden lexicográfico.
        """
        registros = self.consultar_rango("codigo", prefijo, prefijo + CENTINELA_RANGO)
        return [r.codigo for r in registros]

    def buscar_por_codigo(self, codigo: str):
        return self.search(filters={"codigo": codigo}, first=True)

    def buscar_duplicados(self, nombre_completo: str, nombre_curso: str, anio: int):
        """Certificados con el mismo nombre de persona, nombre de curso y año.

        Es la clave de fusión de la importación. Se ordena por antigüedad para
        que, si hay más de uno, siempre se actualice el mismo.
        """
        filtros = {"nombre_completo": nombre_completo, "nombre_curso": nombre_curso, "anio": anio}
        return self.search(filters=filtros, order_by=(Certificado.creado_en, Certificado.id))
