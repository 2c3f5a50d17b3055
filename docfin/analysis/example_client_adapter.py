"""Offline completion client.

Returns a fixed, well-formed analysis so the pipeline can run end to end
without network access. Also a template for new provider adapters: implement
BaseCompletionClient and register the provider in AIExtractorFactory.
"""

import json
from typing import ClassVar

from docfin.analysis.client_base import BaseCompletionClient, ChatMessage


class ExampleClientAdapter(BaseCompletionClient):
    DEFAULT_RESPONSE: ClassVar[dict[str, object]] = {
        "transactions": [
            {
                "id": "example_1",
                "date": "2024-01-15",
                "description": "Example sale",
                "amount": 1500000,
                "type": "income",
                "category": "Penjualan",
            }
        ],
        "summary": {},
        "insights": ["Example provider: the document was not sent to a language model."],
    }

    def complete(
        self,
        *,
        messages: list[ChatMessage],
        model: str,
        temperature: float,
        max_tokens: int,
    ) -> str:
        _ = messages, model, temperature, max_tokens
        return json.dumps(self.DEFAULT_RESPONSE)
