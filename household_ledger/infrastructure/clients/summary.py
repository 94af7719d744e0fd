"""Text-summary HTTP client: hands expense lines to an external summarizer"""

import httpx
from typing import Any, Dict, Iterable, List, Optional
from household_ledger.config import settings
from household_ledger.domain.exceptions import SummaryServiceError
from household_ledger.domain.models import Transaction, TransactionType
from household_ledger.infrastructure.observability.metrics import summary_failure_counter, summary_latency_histogram


def expense_lines(transactions: Iterable[Transaction]) -> List[Dict[str, Any]]:
    """Category, description and amount of every expense, in input order"""
    return [
        {
            "category": t.category.value,
            "description": t.description,
            "amount": str(t.total_price),
        }
        for t in transactions
        if t.type == TransactionType.EXPENSE
    ]


class SummaryClient:
    """Client for the external text-summary service; its reply is passed through untouched"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.summary_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def summarize(self, transactions: Iterable[Transaction], month: int, year: int) -> str:
        """
        Request a free-text synopsis of a month's expenses.

        No retries: a failure surfaces to the caller, who may ask again.

        Raises:
            SummaryServiceError: On timeout, HTTP errors, or a reply without a summary
        """
        payload = {"month": month, "year": year, "expenses": expense_lines(transactions)}

        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                with summary_latency_histogram.time():
                    response = await client.post(f"{self.base_url}/summaries", json=payload)
                response.raise_for_status()
                return str(response.json()["summary"])

            except httpx.TimeoutException as e:
                summary_failure_counter.inc()
                raise SummaryServiceError(f"Summary service timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                summary_failure_counter.inc()
                raise SummaryServiceError(f"Summary service error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                summary_failure_counter.inc()
                raise SummaryServiceError(f"Summary service unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                summary_failure_counter.inc()
                raise SummaryServiceError(f"Invalid reply from summary service: {e}") from e
