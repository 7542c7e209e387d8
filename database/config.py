#  Copyright (c) 2026 Fleer
import os
import sys
from dotenv import load_dotenv

# 1. DETERMINAR RUTAS BASE
if getattr(sys, 'frozen', False):
    # Si es .exe, BASE_DIR será la carpeta del ejecutable
    BASE_DIR = os.path.dirname(sys.executable)
else:
    # Si es Python normal, la carpeta del script
    BASE_DIR = os.path.dirname(os.path.abspath(__file__))

ENV_PATH = os.path.join(BASE_DIR, '.env')
if os.path.exists(ENV_PATH):
    load_dotenv(ENV_PATH)
else:
    load_dotenv()


def _entero_env(clave, defecto):
    """Lee una variable de entorno entera; si no es numérica se usa el valor por defecto."""
    try:
        return int(os.getenv(clave, defecto))
    except (TypeError, ValueError):
        return defecto


# 2. CONFIGURACIÓN DE BASE DE DATOS
DB_TYPE = os.getenv("DB_TYPE", "sqlite")
DB_NAME = os.getenv("DB_NAME", "certificados.db")

if DB_TYPE == "sqlite":
    db_path = os.path.join(BASE_DIR, DB_NAME)
    DATABASE_URL = f"sqlite:///{db_path}"
else:
    _user = os.getenv("DB_USER")
    _pass = os.getenv("DB_PASS")
    _host = os.getenv("DB_HOST")
    _name = os.getenv("DB_NAME_REMOTE")
    _port = os.getenv("DB_PORT", "5432")

    if not all([_user, _pass, _host, _name]):
        fallback_path = os.path.join(BASE_DIR, 'temp_fallback.db')
        DATABASE_URL = f"sqlite:///{fallback_path}"
    else:
        DATABASE_URL = f"postgresql://{_user}:{_pass}@{_host}:{_port}/{_name}"

# 3. CARPETA COMPARTIDA DE CURSOS (NUBE/RED)
# Si no hay ruta en el .env, usa una carpeta local por defecto
ASSETS_DIR = os.path.join(BASE_DIR, 'assets')
DEFAULT_SHARED_DIR = os.path.join(ASSETS_DIR, 'certificados_firmados')
SHARED_FOLDER_PATH = os.getenv("SHARED_FOLDER_PATH", DEFAULT_SHARED_DIR)

# 4. REGLAS DEL MOTOR DE IMPORTACIÓN
# Reintentos ante colisión de código de certificado o de curso
MAX_REINTENTOS_ASIGNACION = _entero_env("MAX_REINTENTOS_ASIGNACION", 3)

# 5. REGISTRO (LOGGING)
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
