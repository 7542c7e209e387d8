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

"""Configuración de mapeos y constantes para la importación de certificados.

Este módulo define las estructuras de datos estáticas utilizadas para la
normalización de encabezados de hojas de cálculo, los catálogos de valores
permitidos y las reglas de generación de códigos de curso.
"""

# Mapeo de campos canónicos y los encabezados que se aceptan para cada uno
COLUMNA_ALIAS = {
    'nombre_completo': ['Nombre Completo', 'nombre_completo', 'Nombre', 'Nombres', 'Full Name', 'full_name'],
    'codigo_curso': ['ID del Curso', 'Código del Curso', 'Codigo Curso', 'Course ID', 'course_id', 'course_code'],
    'nombre_curso': ['Nombre del Curso', 'nombre_del_curso', 'Curso', 'Course Name', 'course_name'],
    'anio': ['Año', 'Ano', 'Anio', 'Year'],
    'mes': ['Mes', 'Month'],
    'edicion': ['Edición', 'Edition'],
    'tipo_curso': ['Tipo de Curso', 'tipo_de_curso', 'Tipo', 'Course Type', 'course_type'],
    'origen': ['Origen', 'Origin'],
    'correo': ['Email', 'Correo', 'Correo Electrónico', 'E-mail', 'Mail'],
    'telefono': ['Teléfono', 'Tel', 'Celular', 'Phone'],
    'fuente_contacto': ['Fuente de Contacto', 'fuente_de_contacto', 'Contact Source', 'contact_source'],
    'estado_entrega': ['Estado de Entrega', 'estado_de_entrega', 'Estado', 'Status', 'Delivery Status', 'delivery_status'],
}
"""dict: Diccionario que asocia cada campo interno con sus posibles encabezados.

La comparación se hace después de normalizar ambos lados (sin tildes, sin
paréntesis, sin puntuación, en minúsculas), de modo que "AÑO (YYYY)" coincide
con "Año". El orden de las claves es el orden de prioridad al asignar columnas.
"""

# Campos que deben tener valor en cada fila
CAMPOS_OBLIGATORIOS = ['nombre_completo']
"""list: Campos sin los cuales una fila se rechaza con un error de validación."""

ETIQUETAS_CAMPOS = {
    'nombre_completo': 'Nombre Completo',
    'codigo_curso': 'ID del Curso',
    'nombre_curso': 'Nombre del Curso',
    'anio': 'Año',
    'mes': 'Mes',
    'edicion': 'Edición',
    'tipo_curso': 'Tipo de Curso',
    'origen': 'Origen',
    'correo': 'Email',
    'telefono': 'Teléfono',
    'fuente_contacto': 'Fuente de Contacto',
    'estado_entrega': 'Estado de Entrega',
}
"""dict: Nombre legible de cada campo, usado en los mensajes de error por fila."""

# Catálogos
TIPOS_CURSO = ["Curso", "Diplomado", "Webinar", "Taller", "Seminario", "Congreso", "Simposio"]
ORIGENES = ["nuevo", "historico"]
ESTADOS_CURSO = ["active", "archived"]
ESTADOS_ENTREGA = ["en_archivo", "listo_para_entrega", "entregado", "digital_enviado", "anulado"]
FUENTES_CONTACTO = ["ninguno", "inscripcion", "retiro_presencial"]

ESTADO_ENTREGA_DEFECTO = "en_archivo"
FUENTE_CONTACTO_DEFECTO = "ninguno"

# Rango de años aceptado en importaciones
ANIO_MINIMO = 2000
ANIO_MAXIMO = 2100

# Generación de códigos de curso a partir del nombre
PALABRAS_VACIAS = {
    "DE", "DEL", "LA", "LAS", "EL", "LOS", "Y", "E", "O", "U", "EN",
    "A", "AL", "PARA", "POR", "CON", "SIN", "SOBRE", "UN", "UNA",
}
"""set: Palabras que no aportan inicial al código de un curso nuevo."""

LONGITUD_MAXIMA_INICIALES = 4
