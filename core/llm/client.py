import time
import openai
from typing import Dict, List, Optional
from config.prompts import OUTPUT_SCHEMAS
from config.settings import settings
from utils.exceptions import LLMAPIError
from utils.logging import logger


class LLMClient:
    """OpenAI LLM API 클라이언트 (텍스트 생성 서비스 경계)"""

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.temperature = settings.llm_temperature
        self._client = None

    @property
    def client(self):
        """Lazy initialization으로 비동기 OpenAI 클라이언트 생성"""
        if self._client is None:
            try:
                self._client = openai.AsyncOpenAI(api_key=self.api_key, timeout=settings.llm_timeout)
                logger.info("OpenAI 클라이언트 초기화 성공")
            except Exception as e:
                logger.error(f"OpenAI 클라이언트 초기화 실패: {e}")
                self._client = None
        return self._client

    def _prepare_response_format(self, output_schema: Optional[object]) -> Optional[dict]:
        """스키마 이름(OUTPUT_SCHEMAS 키) 또는 response_format 사전을 받아 정규화"""
        if output_schema is None:
            return None
        if isinstance(output_schema, str):
            prepared = OUTPUT_SCHEMAS.get(output_schema)
            if prepared is None:
                logger.warning(f"알 수 없는 output_schema: {output_schema}")
            return prepared
        if isinstance(output_schema, dict):
            if "type" in output_schema and "json_schema" in output_schema:
                return output_schema
            # 스키마 본문만 넘어온 경우 래핑
            return {
                "type": "json_schema",
                "json_schema": {"name": "Output", "schema": output_schema, "strict": False},
            }
        logger.warning(f"지원하지 않는 output_schema 형식: {type(output_schema)}")
        return None

    async def generate(
        self,
        model: str,
        messages: List[Dict[str, str]],
        output_schema: Optional[object] = None,
        temperature: Optional[float] = None,
    ) -> str:
        """
        메시지(roles 포함)로 텍스트 생성

        Args:
            model: 사용할 모델 이름
            messages: [{"role": ..., "content": ...}] 목록
            output_schema: OUTPUT_SCHEMAS 키 또는 response_format 사전
            temperature: 생성 온도 (없으면 설정값)

        Returns:
            생성된 텍스트 (구조화 출력이면 JSON 문자열)

        Raises:
            LLMAPIError: LLM API 호출 실패 시
        """
        temperature = self.temperature if temperature is None else temperature
        start_time = time.time()
        try:
            if not self.client:
                raise LLMAPIError("OpenAI 클라이언트가 초기화되지 않았습니다")

            request_kwargs = {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": settings.llm_max_output_tokens,
            }
            response_format = self._prepare_response_format(output_schema)
            if response_format is not None:
                request_kwargs["response_format"] = response_format

            response = await self.client.chat.completions.create(**request_kwargs)

            generated_text = (response.choices[0].message.content or "").strip()
            elapsed_ms = (time.time() - start_time) * 1000
            logger.info(f"텍스트 생성 성공 ({model}, temp={temperature}): {len(generated_text)} 글자, {elapsed_ms:.0f}ms")
            return generated_text

        except LLMAPIError:
            raise
        except Exception as e:
            logger.error(f"텍스트 생성 실패 ({model}, temp={temperature}): {str(e)}")
            raise LLMAPIError(f"텍스트 생성 실패: {str(e)}")


# 전역 LLM 클라이언트 인스턴스
llm_client = LLMClient()
