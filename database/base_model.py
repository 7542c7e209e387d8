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

import operator
from functools import wraps

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from database.conexion import SessionLocal
from utilities.errores import ErrorAlmacen

OPERADORES = {
    "==": operator.eq,
    "!=": operator.ne,
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
}


def traducir_errores(metodo):
    """Convierte cualquier SQLAlchemyError en ErrorAlmacen con el nombre de la tabla."""

    @wraps(metodo)
    def envoltura(self, *args, **kwargs):
        try:
            return metodo(self, *args, **kwargs)
        except SQLAlchemyError as e:
            tabla = getattr(self.model, "__tablename__", "?")
            raise ErrorAlmacen(f"Error de base de datos en '{tabla}': {e}") from e

    return envoltura


class BaseCRUDModel:
    """Clase base para operaciones CRUD genéricas en modelos SQLAlchemy.

    Proporciona métodos estandarizados para crear, leer, actualizar y eliminar registros,
    así como la interfaz de almacén que consume el motor de importación:
    consulta por campo, consulta por rango e inserción condicional.
    Las clases hijas deben definir el atributo de clase `model`.

    Todos los fallos de SQLAlchemy se propagan como `ErrorAlmacen`.
    """

    model = None  # se define en la subclase

    def __init__(self, session_factory=None):
        """
        Args:
            session_factory (sessionmaker, optional): Fábrica de sesiones; por
                defecto la del motor configurado en `database.conexion`.
        """
        self._session_factory = session_factory or SessionLocal

    # ----------------------------
    # MÉTODOS BÁSICOS CRUD
    # ----------------------------
    def _get_session(self):
        """Crea y devuelve una nueva sesión de base de datos.

        Returns:
            Session: Una instancia de sqlalchemy.orm.Session.
        """
        return self._session_factory()

    def _columna(self, campo: str):
        if not hasattr(self.model, campo):
            raise ValueError(f"El modelo {self.model.__name__} no tiene el campo '{campo}'")
        return getattr(self.model, campo)

    @traducir_errores
    def get_all(self, order_by=None):
        """Recupera todos los registros existentes del modelo.

        Args:
            order_by (Column, optional): Criterio de ordenamiento.

        Returns:
            list: Lista de todas las instancias del modelo en la base de datos.
        """
        with self._get_session() as session:
            query = session.query(self.model)
            if order_by is not None:
                query = query.order_by(order_by)
            return query.all()

    @traducir_errores
    def get_by_id(self, obj_id):
        """Busca un registro por su clave primaria.

        Args:
            obj_id: El identificador único del registro.

        Returns:
            object: La instancia del modelo si existe, None en caso contrario.
        """
        if obj_id is None:
            return None
        with self._get_session() as session:
            return session.get(self.model, obj_id)

    @traducir_errores
    def create(self, data: dict):
        """Crea un nuevo registro en la base de datos.

        Args:
            data (dict): Diccionario con los datos para inicializar el modelo.

        Returns:
            object: La instancia del modelo recién creada y persistida.
        """
        with self._get_session() as session:
            try:
                obj = self.model(**data)
                session.add(obj)
                session.commit()
                session.refresh(obj)
                return obj
            except IntegrityError:
                session.rollback()
                raise

    @traducir_errores
    def crear_si_no_existe(self, data: dict, clave: str = "id"):
        """Inserta un registro solo si no existe otro con el mismo valor en `clave`.

        Es la escritura condicional que usan la asignación de códigos y la
        creación implícita de cursos: la restricción única de la base de datos
        decide quién gana cuando dos procesos eligen el mismo valor.

        Args:
            data (dict): Datos del nuevo registro; debe incluir `clave`.
            clave (str): Campo con restricción de unicidad (PK o UNIQUE).

        Returns:
            object | None: La instancia creada, o None si ya existía un registro
            con ese valor de `clave`.

        Raises:
            ErrorAlmacen: Si la inserción falla por cualquier otro motivo
                (ej. clave foránea inexistente).
        """
        columna = self._columna(clave)
        valor = data.get(clave)
        with self._get_session() as session:
            obj = self.model(**data)
            session.add(obj)
            try:
                session.commit()
            except IntegrityError:
                session.rollback()
                if valor is not None and session.query(self.model).filter(columna == valor).first():
                    return None
                raise
            session.refresh(obj)
            return obj

    @traducir_errores
    def update(self, obj_id, data: dict):
        """Actualiza un registro existente identificado por su ID.

        Args:
            obj_id: ID del registro a actualizar.
            data (dict): Diccionario clave-valor con los campos a modificar.

        Returns:
            object: La instancia actualizada si existe, None si no se encuentra.
        """
        with self._get_session() as session:
            try:
                obj = session.get(self.model, obj_id)
                if not obj:
                    return None
                for key, value in data.items():
                    if hasattr(obj, key):
                        setattr(obj, key, value)
                session.commit()
                session.refresh(obj)
                return obj
            except IntegrityError:
                session.rollback()
                raise

    @traducir_errores
    def delete(self, obj_id):
        """Elimina un registro de la base de datos por su ID.

        Args:
            obj_id: ID del registro a eliminar.

        Returns:
            bool: True si se eliminó correctamente, False si el registro no existía.
        """
        with self._get_session() as session:
            obj = session.get(self.model, obj_id)
            if not obj:
                return False
            session.delete(obj)
            session.commit()
            return True

    # ----------------------------
    # INTERFAZ DE ALMACÉN
    # ----------------------------
    @traducir_errores
    def consultar(self, campo: str, operador: str, valor, order_by=None):
        """Devuelve los registros cuyo `campo` cumple `operador` frente a `valor`.

        Args:
            campo (str): Nombre de la columna.
            operador (str): Uno de '==', '!=', '>', '>=', '<', '<='.
            valor: Valor de comparación.
            order_by (Column, optional): Criterio de ordenamiento.

        Returns:
            list: Registros que cumplen la condición.
        """
        if operador not in OPERADORES:
            raise ValueError(f"Operador no soportado: {operador}")
        condicion = OPERADORES[operador](self._columna(campo), valor)
        with self._get_session() as session:
            query = session.query(self.model).filter(condicion)
            if order_by is not None:
                query = query.order_by(order_by)
            return query.all()

    @traducir_errores
    def consultar_rango(self, campo: str, inferior, superior):
        """Consulta semiabierta [inferior, superior) sobre una columna ordenada.

        Con cadenas simula un "empieza por" cuando `superior` es el prefijo
        seguido de un carácter centinela alto.

        Returns:
            list: Registros en el rango, ordenados por `campo`.
        """
        columna = self._columna(campo)
        with self._get_session() as session:
            return (
                session.query(self.model)
                .filter(columna >= inferior, columna < superior)
                .order_by(columna)
                .all()
            )

    # ----------------------------
    # MÉTODO AUXILIAR DE FILTRADO
    # ----------------------------
    def _apply_filters(self, query, filters: dict | None = None):
        """Aplica filtros de igualdad exacta (AND) a una consulta.

        Args:
            query (Query): Objeto Query base de SQLAlchemy.
            filters (dict, optional): Filtros de igualdad exacta. {campo: valor}.

        Returns:
            Query: El objeto Query modificado con los filtros aplicados.
        """
        if filters:
            for field, value in filters.items():
                if hasattr(self.model, field) and value is not None:
                    query = query.filter(getattr(self.model, field) == value)
        return query

    # ----------------------------
    # MÉTODOS DE CONSULTA AVANZADA
    # ----------------------------
    @traducir_errores
    def count(self, filters: dict | None = None):
        """Cuenta el número de registros que coinciden con los filtros dados.

        Returns:
            int: Cantidad de registros encontrados.
        """
        with self._get_session() as session:
            query = self._apply_filters(session.query(self.model), filters)
            return query.count()

    @traducir_errores
    def search(self, filters: dict | None = None, order_by=None, first: bool = False):
        """Realiza una búsqueda con filtros y ordenamiento.

        Args:
            filters (dict, optional): Filtros exactos (AND).
            order_by (Column | tuple, optional): Criterio(s) de ordenamiento SQLAlchemy.
            first (bool, optional): Si True, devuelve solo el primer resultado.

        Returns:
            list | object: Lista de resultados o una instancia única si first=True.
        """
        with self._get_session() as session:
            query = self._apply_filters(session.query(self.model), filters)

            if order_by is not None:
                criterios = order_by if isinstance(order_by, (list, tuple)) else (order_by,)
                query = query.order_by(*criterios)

            return query.first() if first else query.all()
