"""OpenAI-compatible chat completions client for the AI gateway."""

from dataclasses import dataclass

from openai import AsyncOpenAI

from pocketfit.services.insights import InsightsClient


@dataclass
class OpenAIGatewayClient(InsightsClient):
    """Insights client backed by an OpenAI-compatible gateway."""

    client: AsyncOpenAI
    temperature: float = 0.7

    @classmethod
    def create(cls, api_key: str, base_url: str) -> "OpenAIGatewayClient":
        """Create a gateway client."""
        return cls(client=AsyncOpenAI(api_key=api_key, base_url=base_url))

    async def complete(
        self, *, model: str, system_prompt: str, user_prompt: str
    ) -> str:
        """Send a chat completion and return the first choice's text."""
        response = await self.client.chat.completions.create(
            model=model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
            temperature=self.temperature,
        )
        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise RuntimeError("AI gateway returned an empty response")
        return content

    async def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        await self.client.close()
