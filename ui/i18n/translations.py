"""Translation dictionaries for the UI (strings may include Unicode accents)."""

DEFAULT_LANG: str = 'es'

SUPPORTED_LANGS: dict[str, str] = {
    'es': 'Español',
    'en': 'English',
}

TRANSLATIONS: dict[str, dict[str, str]] = {
    'en': {
        'add_point': 'Add point',
        'address_label': 'Address',
        'cancel_edit': 'Cancel',
        'capacity': 'Capacity',
        'col_address': 'Address',
        'col_city': 'City',
        'col_id': 'ID',
        'col_latitude': 'Latitude',
        'col_longitude': 'Longitude',
        'col_name': 'Name',
        'confirm_checkbox': 'Yes, proceed',
        'confirm_cost': 'Geocoding **{count}** addresses costs about **USD ${cost}**.',
        'confirm_title': 'Confirm geocoding',
        'delete': 'Delete',
        'download_excel': 'Download Excel with coordinates',
        'edit': 'Edit',
        'file_loaded': 'File loaded: {count} passengers found',
        'form_title_add': 'New pickup point',
        'form_title_edit': 'Edit pickup point',
        'geocode_key_error': 'Geocoding is not configured: {error}',
        'geocoded_count': '({count} geocoded)',
        'geocoding_done': 'Geocoding completed: {ok} of {total} addresses geocoded',
        'geocoding_instructions': 'Upload an Excel file with the columns **id**, **name**, **address** '
                                  'and **city**. Addresses are cleaned automatically and the city is '
                                  'used for better accuracy.',
        'geocoding_progress': 'Processing... ({current}/{total})',
        'geocoding_title': 'Address geocoding',
        'grupo_label': 'Group (optional)',
        'grupo_line': 'Group: {grupo}',
        'import_error': 'Could not import the file: {error}',
        'language_label': 'Language',
        'latitude_label': 'Latitude',
        'longitude_label': 'Longitude',
        'map_error': 'Could not draw the map: {error}',
        'map_preview': 'Map preview',
        'name_label': 'Name',
        'nav_label': 'Page',
        'need_points': 'Add at least one pickup point first.',
        'need_vehicles': 'Add at least one vehicle first.',
        'nextmv_error': 'Nextmv error: {error}',
        'no_passengers': 'Upload an Excel file first.',
        'no_pickup_points': 'No pickup points yet. Add one with the form or import geocoded passengers.',
        'no_search_results': 'No points match "{query}".',
        'open_in_maps': 'Open in Google Maps',
        'optimization_title': 'Route optimization (Nextmv)',
        'optimize': 'Optimize routes',
        'page_geocoding': 'Geocoding',
        'page_optimization': 'Optimization',
        'page_pickup_points': 'Pickup points',
        'passengers_loaded': '{count} passengers loaded',
        'people_help': 'One row per person. Leave empty for a single name.',
        'people_label': 'People at this point',
        'person_id_label': 'Passenger ID (optional)',
        'pickup_points_imported': '{count} pickup points added.',
        'pickup_title': 'Pickup points ({count})',
        'point_added': 'Pickup point added.',
        'point_deleted': 'Pickup point deleted.',
        'point_error': 'Invalid pickup point: {error}',
        'point_updated': 'Pickup point updated.',
        'quantity_label': 'Quantity',
        'quantity_line': 'Passengers: {quantity}',
        'refresh_run': 'Refresh result',
        'route_line': '**{vehicle}**: {stops} stops',
        'routes_title': 'Routes',
        'run_failed': 'The Nextmv run did not succeed (status: {status}).',
        'run_status': 'Run `{run_id}` status: {status}',
        'run_submitted': 'Run {run_id} submitted.',
        'search_placeholder': 'Search by name, address or ID...',
        'start_geocoding': 'Start geocoding',
        'start_latitude': 'Start latitude',
        'start_longitude': 'Start longitude',
        'submitting': 'Sending to Nextmv...',
        'timinglog_expander': 'Show detailed timing',
        'total_quantity': 'Total passengers: {count}',
        'update_point': 'Update point',
        'use_as_pickup_points': 'Use geocoded passengers as pickup points',
        'vehicle_error': 'Invalid vehicle row: {error}',
        'vehicle_id': 'Vehicle',
        'vehicles_label': 'Vehicles',
    },
    'es': {
        'add_point': 'Agregar punto',
        'address_label': 'Dirección',
        'cancel_edit': 'Cancelar',
        'capacity': 'Capacidad',
        'col_address': 'Dirección',
        'col_city': 'Ciudad',
        'col_id': 'ID',
        'col_latitude': 'Latitud',
        'col_longitude': 'Longitud',
        'col_name': 'Nombre',
        'confirm_checkbox': 'Sí, proceder',
        'confirm_cost': 'La geocodificación de **{count}** direcciones cuesta aproximadamente '
                        '**USD ${cost}**.',
        'confirm_title': 'Confirmar geocodificación',
        'delete': 'Eliminar',
        'download_excel': 'Descargar Excel con coordenadas',
        'edit': 'Editar',
        'file_loaded': 'Archivo cargado: {count} pasajeros encontrados',
        'form_title_add': 'Nuevo punto de recogida',
        'form_title_edit': 'Editar punto de recogida',
        'geocode_key_error': 'La geocodificación no está configurada: {error}',
        'geocoded_count': '({count} geocodificados)',
        'geocoding_done': 'Geocodificación completada: {ok} de {total} direcciones geocodificadas',
        'geocoding_instructions': 'Carga un archivo Excel con las columnas **id**, **name**, '
                                  '**address** y **city**. Las direcciones se limpian '
                                  'automáticamente y la ciudad se usa para mayor precisión.',
        'geocoding_progress': 'Procesando... ({current}/{total})',
        'geocoding_title': 'Geocodificación de direcciones',
        'grupo_label': 'Grupo (opcional)',
        'grupo_line': 'Grupo: {grupo}',
        'import_error': 'No se pudo importar el archivo: {error}',
        'language_label': 'Idioma',
        'latitude_label': 'Latitud',
        'longitude_label': 'Longitud',
        'map_error': 'No se pudo dibujar el mapa: {error}',
        'map_preview': 'Vista previa en mapa',
        'name_label': 'Nombre',
        'nav_label': 'Página',
        'need_points': 'Agrega al menos un punto de recogida primero.',
        'need_vehicles': 'Agrega al menos un vehículo primero.',
        'nextmv_error': 'Error de Nextmv: {error}',
        'no_passengers': 'Por favor, carga un archivo Excel primero.',
        'no_pickup_points': 'No hay puntos de recogida. Agrega uno con el formulario o importa '
                            'pasajeros geocodificados.',
        'no_search_results': 'No se encontraron puntos que coincidan con "{query}".',
        'open_in_maps': 'Abrir en Google Maps',
        'optimization_title': 'Optimización de rutas (Nextmv)',
        'optimize': 'Optimizar rutas',
        'page_geocoding': 'Geocodificación',
        'page_optimization': 'Optimización',
        'page_pickup_points': 'Puntos de recogida',
        'passengers_loaded': '{count} pasajeros cargados',
        'people_help': 'Una fila por persona. Déjalo vacío para un solo nombre.',
        'people_label': 'Personas en este punto',
        'person_id_label': 'ID Pasajero (opcional)',
        'pickup_points_imported': '{count} puntos de recogida agregados.',
        'pickup_title': 'Puntos de recogida ({count})',
        'point_added': 'El punto de recogida ha sido agregado.',
        'point_deleted': 'El punto de recogida ha sido eliminado.',
        'point_error': 'Punto de recogida inválido: {error}',
        'point_updated': 'El punto de recogida ha sido actualizado.',
        'quantity_label': 'Cantidad',
        'quantity_line': 'Pasajeros: {quantity}',
        'refresh_run': 'Actualizar resultado',
        'route_line': '**{vehicle}**: {stops} paradas',
        'routes_title': 'Rutas',
        'run_failed': 'La ejecución de Nextmv no tuvo éxito (estado: {status}).',
        'run_status': 'Estado de la ejecución `{run_id}`: {status}',
        'run_submitted': 'Ejecución {run_id} enviada.',
        'search_placeholder': 'Buscar por nombre, dirección o ID...',
        'start_geocoding': 'Iniciar geocodificación',
        'start_latitude': 'Latitud inicial',
        'start_longitude': 'Longitud inicial',
        'submitting': 'Enviando a Nextmv...',
        'timinglog_expander': 'Mostrar tiempos detallados',
        'total_quantity': 'Total de pasajeros: {count}',
        'update_point': 'Actualizar punto',
        'use_as_pickup_points': 'Usar pasajeros geocodificados como puntos de recogida',
        'vehicle_error': 'Fila de vehículo inválida: {error}',
        'vehicle_id': 'Vehículo',
        'vehicles_label': 'Vehículos',
    },
}


def translate(lang: str, key: str, **kwargs: object) -> str:
    """Look up `key` for `lang`, falling back to the default language, then to the key.

    Args:
        lang: Language code.
        key: Translation key.
        **kwargs: Optional format arguments.

    Returns:
        Translated string.
    """
    text = TRANSLATIONS.get(lang, {}).get(key)
    if text is None:
        text = TRANSLATIONS.get(DEFAULT_LANG, {}).get(key, key)

    if kwargs:
        try:
            return text.format(**kwargs)
        except (KeyError, IndexError, ValueError):
            return text

    return text
