"""
Búsqueda de vídeos musicales en la YouTube Data API v3.

El cliente recibe su configuración (clave de API, endpoint, límites) en el
constructor; nunca lee variables de entorno por su cuenta. Cada búsqueda es
una única petición GET, sin reintentos, cuyo resultado se transforma en una
lista de URLs de reproductores embebidos.
"""

import logging
from typing import List, Optional
from urllib.parse import quote_plus

import requests

logger = logging.getLogger(__name__)

YOUTUBE_SEARCH_URL = 'https://www.googleapis.com/youtube/v3/search'
YOUTUBE_EMBED_TEMPLATE = 'https://www.youtube.com/embed/{video_id}?autoplay=0'
MAX_RESULTS_LIMIT = 10

# Tipos de fallo de la búsqueda
FETCH_CONFIGURATION = 'configuration'
FETCH_NETWORK = 'network'
FETCH_API = 'api'
FETCH_MALFORMED = 'malformed'
FETCH_EMPTY = 'empty_results'


class MusicFetchError(Exception):
    """
    Error de búsqueda musical.
    
    Attributes:
        kind (str): configuration | network | api | malformed | empty_results
    """
    
    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message


class YouTubeMusicFetcher:
    """
    Cliente mínimo del endpoint de búsqueda de YouTube.
    
    Attributes:
        api_key (str): Credencial de la API (solo vive en el servidor)
        search_url (str): Endpoint de búsqueda
        max_results (int): Número máximo de resultados (<= 10)
        timeout (float): Timeout de la petición HTTP en segundos
        embed_template (str): Plantilla de URL embebida con ``{video_id}``
    
    Example:
        >>> fetcher = YouTubeMusicFetcher(api_key='...')
        >>> fetcher.fetch('happy upbeat music')
        ['https://www.youtube.com/embed/abc123?autoplay=0', ...]
    """
    
    def __init__(
        self,
        api_key: Optional[str],
        search_url: str = YOUTUBE_SEARCH_URL,
        max_results: int = MAX_RESULTS_LIMIT,
        timeout: float = 10.0,
        embed_template: str = YOUTUBE_EMBED_TEMPLATE,
        session: Optional[requests.Session] = None
    ):
        self.api_key = api_key
        self.search_url = search_url
        self.max_results = max(1, min(MAX_RESULTS_LIMIT, int(max_results)))
        self.timeout = timeout
        self.embed_template = embed_template
        self.session = session or requests.Session()
    
    def build_params(self, query: str) -> dict:
        """Parámetros de la petición de búsqueda."""
        return {
            'part': 'snippet',
            'q': query,
            'key': self.api_key,
            'type': 'video',
            'maxResults': self.max_results,
        }
    
    def embed_url(self, video_id: str) -> str:
        return self.embed_template.format(video_id=video_id)
    
    def fetch(self, query: str) -> List[str]:
        """
        Busca vídeos para una frase y devuelve sus URLs embebidas.
        
        Args:
            query (str): Frase de búsqueda
        
        Returns:
            List[str]: URLs embebidas, en el orden de la respuesta
        
        Raises:
            MusicFetchError: Si falta la clave, falla la red, la API responde
                con error, el cuerpo no es JSON válido o no hay resultados
        """
        if not self.api_key:
            raise MusicFetchError(FETCH_CONFIGURATION, 'No hay clave de API de YouTube configurada')
        
        logger.info(f"Buscando música en YouTube: '{query}'")
        
        try:
            response = self.session.get(
                self.search_url,
                params=self.build_params(query),
                timeout=self.timeout
            )
        except requests.RequestException as e:
            reason = self._redact(str(e))
            logger.error(f"Error de red al consultar YouTube: {reason}")
            raise MusicFetchError(FETCH_NETWORK, f'Error de red: {reason}') from None
        
        if response.status_code >= 400:
            logger.error(f"YouTube respondió con HTTP {response.status_code}")
            raise MusicFetchError(FETCH_API, f'La API de YouTube respondió con HTTP {response.status_code}')
        
        try:
            data = response.json()
        except ValueError as e:
            logger.error(f"Respuesta de YouTube no es JSON válido: {e}")
            raise MusicFetchError(FETCH_MALFORMED, 'La respuesta de YouTube no es JSON válido') from e
        
        if not isinstance(data, dict):
            logger.error("Respuesta de YouTube con formato inesperado")
            raise MusicFetchError(FETCH_MALFORMED, 'La respuesta de YouTube tiene un formato inesperado')
        
        urls = self._extract_urls(data.get('items'))
        
        if not urls:
            logger.error(f"YouTube no devolvió resultados para '{query}'")
            raise MusicFetchError(FETCH_EMPTY, f"Sin resultados para '{query}'")
        
        logger.info(f"{len(urls)} vídeo(s) encontrados para '{query}'")
        return urls
    
    def _redact(self, text: str) -> str:
        """Elimina la clave de API de un texto (las excepciones de requests incluyen la URL)."""
        if self.api_key:
            for secret in (self.api_key, quote_plus(self.api_key)):
                text = text.replace(secret, '***')
        return text
    
    def _extract_urls(self, items) -> List[str]:
        urls = []
        if not isinstance(items, list):
            return urls
        
        for item in items:
            video_id = None
            if isinstance(item, dict) and isinstance(item.get('id'), dict):
                video_id = item['id'].get('videoId')
            if not video_id:
                logger.debug(f"Resultado sin videoId descartado: {item!r}")
                continue
            urls.append(self.embed_url(video_id))
        
        return urls[:self.max_results]
