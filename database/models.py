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

from sqlalchemy import (
    Column, String, ForeignKey, DateTime, Enum, Integer, Boolean, Index
)
from sqlalchemy.orm import relationship
from database.conexion import Base
from utilities.uid import generar_uid, marca_tiempo
from config.mappings import (
    TIPOS_CURSO, ORIGENES, ESTADOS_CURSO, ESTADOS_ENTREGA, FUENTES_CONTACTO
)


# ---------------- MODELOS ----------------

class Curso(Base):
    """Modelo que representa un curso, diplomado o evento de una edición y año concretos.

    La clave primaria es el código corto legible (ej. "LM-2025", "LM-1-2025").
    `codigo` duplica ese valor como campo indexado; los registros antiguos
    pueden tenerlo vacío o con otra grafía.
    """
    __tablename__ = "cursos"

    id = Column(String(60), primary_key=True)
    codigo = Column(String(60), nullable=True, index=True)
    nombre = Column(String(255), nullable=False)
    tipo_curso = Column(Enum(*TIPOS_CURSO, name="tipo_curso"), nullable=False, default="Curso")
    anio = Column(Integer, nullable=False, index=True)
    mes = Column(Integer, nullable=True)
    edicion = Column(Integer, nullable=True)
    origen = Column(Enum(*ORIGENES, name="origen_curso"), nullable=False, default="nuevo")
    estado = Column(Enum(*ESTADOS_CURSO, name="estado_curso"), nullable=False, default="active")

    # Referencia opaca a la carpeta del curso en el almacenamiento externo
    carpeta_id = Column(String(500), nullable=True)

    creado_en = Column(DateTime, default=marca_tiempo, nullable=False)
    actualizado_en = Column(DateTime, default=marca_tiempo, onupdate=marca_tiempo, nullable=False)

    certificados = relationship("Certificado", back_populates="curso")


class Certificado(Base):
    """Modelo que representa un certificado emitido y su estado de entrega.

    `codigo` es el identificador humano secuencial (PREFIJO[-EDICION]-AÑO-NN),
    único en toda la tabla; `id` es una clave opaca generada aquí.
    """
    __tablename__ = "certificados"

    id = Column(String(26), primary_key=True, default=generar_uid, index=True)

    curso_id = Column(
        String(60),
        ForeignKey("cursos.id", onupdate="CASCADE"),
        nullable=False
    )
    codigo = Column(String(100), unique=True, nullable=False)

    nombre_completo = Column(String(255), nullable=False)
    nombre_curso = Column(String(255), nullable=False)
    tipo_curso = Column(String(50), nullable=False, default="Curso")
    anio = Column(Integer, nullable=False)
    mes = Column(Integer, nullable=True)
    edicion = Column(Integer, nullable=True)
    origen = Column(Enum(*ORIGENES, name="origen_certificado"), nullable=False, default="nuevo")

    correo = Column(String(150), nullable=True)
    telefono = Column(String(50), nullable=True)
    fuente_contacto = Column(
        Enum(*FUENTES_CONTACTO, name="fuente_contacto"), nullable=False, default="ninguno"
    )

    # Archivo firmado ya adjuntado; una reimportación nunca lo borra
    archivo_drive_id = Column(String(200), nullable=True)

    estado_entrega = Column(
        Enum(*ESTADOS_ENTREGA, name="estado_entrega"), nullable=False, default="en_archivo"
    )
    fecha_entrega = Column(DateTime, nullable=True)
    entregado_a = Column(String(255), nullable=True)
    ubicacion_fisica = Column(String(255), nullable=True)
    codigo_folio = Column(String(100), nullable=True)

    correo_enviado = Column(Boolean, default=False, nullable=False)
    whatsapp_enviado = Column(Boolean, default=False, nullable=False)
    consentimiento_marketing = Column(Boolean, default=False, nullable=False)

    creado_en = Column(DateTime, default=marca_tiempo, nullable=False)
    actualizado_en = Column(DateTime, default=marca_tiempo, onupdate=marca_tiempo, nullable=False)

    curso = relationship("Curso", back_populates="certificados")

    __table_args__ = (
        Index("ix_certificado_duplicado", "nombre_completo", "nombre_curso", "anio"),
    )
