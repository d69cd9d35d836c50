"""
Motor de agenda y stock de medicaciones.

Todo lo que vive en este paquete es puro: no toca la base de datos ni la
sesión. Las rutas y los servicios le pasan filas ya cargadas.
"""
