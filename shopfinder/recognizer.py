import base64
import json
import time

from loguru import logger

from shopfinder.clients import OpenAIClient
from shopfinder.config import RECOGNIZER_MODEL
from shopfinder.errors import ConfigurationError, RecognitionError
from shopfinder.models import ImageUpload, RecognitionResult

PROMPT_TEMPLATE = """Objetivo: Analise a imagem fornecida e retorne apenas um objeto JSON válido, sem nenhum outro texto antes ou depois.

Instruções:

Você é um assistente de IA que atua como uma API. Sua resposta deve ser um JSON formatado (mime type application/json).

Analise a imagem para identificar o estabelecimento principal.

Tente identificar qualquer texto na imagem que indique uma localização (nome da rua, cidade, placa de endereço).

Gere uma lista de tags descritivas, estilo e uma descrição detalhada.

Esquema JSON de Saída Obrigatório:

{
  "estabelecimento": "Nome principal do local na imagem",
  "categoria": "Tipo de estabelecimento (ex: Restaurante, Supermercado, Farmácia)",
  "tags": [
    "tag visual 1",
    "tag conceitual 2",
    "tag de cor 3"
  ],
  "estilo": "Descrição do estilo e ambiente (ex: Moderno, Casual, Varejo)",
  "descricao": "Descrição detalhada do que é visto na imagem (objetos, arquitetura, cores)",
  "localizacao_texto": "Qualquer texto de endereço, rua ou cidade visível na imagem. Se nada for encontrado, retorne null."
}
"""


def _image_data_url(upload: ImageUpload) -> str:
    encoded = base64.b64encode(upload.data).decode("ascii")
    return f"data:{upload.mime_type};base64,{encoded}"


def parse_recognition_text(text: str) -> RecognitionResult:
    """
    Parse the recognizer's reply into a RecognitionResult.

    Markdown code fences around the JSON are tolerated and stripped.

    Args:
        text (str): Raw message content returned by the model.

    Returns:
        RecognitionResult: The structured record.

    Raises:
        RecognitionError: If the text is empty or not a valid record.
    """
    if not text:
        raise RecognitionError("Empty response from the recognizer")

    json_string = text.replace("```json", "").replace("```", "").strip()
    try:
        payload = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise RecognitionError(f"Recognizer response is not valid JSON: {e}") from e

    return RecognitionResult.from_payload(payload)


async def recognize_establishment(upload: ImageUpload) -> RecognitionResult:
    """
    Ask the vision model to describe the establishment shown in an image.

    Args:
        upload (ImageUpload): Validated image upload.

    Returns:
        RecognitionResult: Structured description of the establishment.

    Raises:
        RecognitionError: On any provider error or malformed response. This is
                          the only collaborator failure that aborts a run.
    """
    start = time.perf_counter()
    logger.debug(f"▶️ START recognition for '{upload.name}' ({upload.mime_type}, {upload.size} bytes)")
    try:
        openai_client = OpenAIClient()
        resp = await openai_client.chat_completions_create(
            model=RECOGNIZER_MODEL,
            response_format={"type": "json_object"},
            messages=[
                {
                    "role": "user",
                    "content": [
                        {"type": "text", "text": PROMPT_TEMPLATE},
                        {"type": "image_url", "image_url": {"url": _image_data_url(upload)}},
                    ],
                }
            ],
            temperature=0,
        )
        text = resp.choices[0].message.content
    except ConfigurationError:
        raise
    except Exception as e:
        logger.debug(f"⚠️ Recognition request failed for '{upload.name}': {e}")
        raise RecognitionError("Failed to analyze the image with the AI.") from e

    try:
        result = parse_recognition_text(text)
    except RecognitionError as e:
        logger.debug(f"⚠️ Malformed recognition for '{upload.name}': {e}")
        raise RecognitionError("Failed to analyze the image with the AI.") from e

    duration = time.perf_counter() - start
    logger.debug(f"✅ Recognized '{result.establishment_name}' in {duration:.2f}s")
    return result
