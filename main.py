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

"""
Línea de comandos de gestión de certificados.

Ejemplos:
  python main.py init-db
  python main.py importar certificados.xlsx
  python main.py siguiente LM 2025
  python main.py crear-curso LM-2025 "Liderazgo Moderno" --anio 2025 --tipo Taller
"""
import argparse
import json
import logging
import sys

import database.config as config
from controllers.import_processor import ProcesadorImportacion
from database.setup import inicializar_base_de_datos
from services.servicio_certificados import ServicioCertificados
from services.servicio_cursos import ServicioCursos
from utilities.errores import ErrorGestion

logger = logging.getLogger("gestion_certificados")


def configurar_logging(nivel: str | None = None) -> None:
    logging.basicConfig(level=(nivel or config.LOG_LEVEL).upper(), format=config.LOG_FORMAT)


def cmd_init_db(args: argparse.Namespace) -> int:
    return 0 if inicializar_base_de_datos() else 1


def cmd_importar(args: argparse.Namespace) -> int:
    inicializar_base_de_datos()
    resultado = ProcesadorImportacion().importar_archivo(args.archivo)
    print(json.dumps(resultado.a_dict(), indent=2, ensure_ascii=False))
    return 0 if not resultado.errores else 3


def cmd_siguiente(args: argparse.Namespace) -> int:
    inicializar_base_de_datos()
    numero, codigo = ServicioCertificados().siguiente_secuencia(args.codigo_curso, args.anio, args.edicion)
    print(json.dumps({"siguiente": numero, "codigo": codigo}, ensure_ascii=False))
    return 0


def cmd_crear_curso(args: argparse.Namespace) -> int:
    inicializar_base_de_datos()
    curso = ServicioCursos().crear_curso({
        "id": args.id,
        "nombre": args.nombre,
        "tipo_curso": args.tipo,
        "anio": args.anio,
        "mes": args.mes,
        "edicion": args.edicion,
        "origen": args.origen,
    })
    print(json.dumps({"id": curso.id, "nombre": curso.nombre, "carpeta": curso.carpeta_id}, ensure_ascii=False))
    return 0


def parse_args(argv=None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Gestión de certificados: importación y códigos secuenciales")
    p.add_argument("--log-level", help="Nivel de registro (por defecto LOG_LEVEL del .env)")
    sub = p.add_subparsers(dest="cmd", required=True)

    s = sub.add_parser("init-db", help="Crea las tablas de la base de datos")
    s.set_defaults(func=cmd_init_db)

    s = sub.add_parser("importar", help="Importa certificados desde .xlsx, .xls, .ods o .csv")
    s.add_argument("archivo", help="Ruta del archivo a importar")
    s.set_defaults(func=cmd_importar)

    s = sub.add_parser("siguiente", help="Muestra el próximo código de certificado de un curso")
    s.add_argument("codigo_curso", help="Código base del curso, ej. LM o LM-2025")
    s.add_argument("anio", type=int, help="Año del certificado")
    s.add_argument("--edicion", type=int, help="Edición del curso")
    s.set_defaults(func=cmd_siguiente)

    s = sub.add_parser("crear-curso", help="Crea un curso y su carpeta")
    s.add_argument("id", help="Código del curso, ej. LM-2025")
    s.add_argument("nombre", help="Nombre del curso")
    s.add_argument("--anio", type=int, required=True)
    s.add_argument("--tipo", default="Curso")
    s.add_argument("--mes", type=int)
    s.add_argument("--edicion", type=int)
    s.add_argument("--origen", default="nuevo")
    s.set_defaults(func=cmd_crear_curso)

    return p.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    configurar_logging(args.log_level)
    try:
        return args.func(args)
    except (ErrorGestion, ValueError) as e:
        logger.error("%s", e)
        return 2


if __name__ == "__main__":
    sys.exit(main())
