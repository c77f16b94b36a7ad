"""RPC response schemas - accounts, signatures, transactions."""

from typing import Any

from pydantic import BaseModel, Field


class AccountInfoSchema(BaseModel):
    """Parsed account (getAccountInfo, jsonParsed encoding)."""

    owner: str
    executable: bool = False
    lamports: int = 0
    data: dict | list | str | None = None
    space: int | None = None

    @property
    def parsed_info(self) -> dict[str, Any]:
        """``data.parsed.info`` when the node could parse the account, else ``{}``."""
        if not isinstance(self.data, dict):
            return {}
        parsed = self.data.get("parsed")
        if not isinstance(parsed, dict):
            return {}
        info = parsed.get("info")
        return info if isinstance(info, dict) else {}

    @property
    def program_data_account(self) -> str | None:
        """Address of the separate program-data account (upgradeable programs)."""
        return self.parsed_info.get("programData") or None


class SignatureInfoSchema(BaseModel):
    """Entry of getSignaturesForAddress."""

    signature: str
    slot: int | None = None
    block_time: int | None = Field(alias="blockTime", default=None)
    err: Any = None
    memo: str | None = None
    confirmation_status: str | None = Field(alias="confirmationStatus", default=None)

    class Config:
        populate_by_name = True


class TransactionMetaSchema(BaseModel):
    """Transaction status meta - only the fields we read."""

    err: Any = None
    log_messages: list[str] | None = Field(alias="logMessages", default=None)

    class Config:
        populate_by_name = True


class ParsedTransactionSchema(BaseModel):
    """Parsed transaction (getTransaction, jsonParsed encoding)."""

    slot: int
    block_time: int | None = Field(alias="blockTime", default=None)
    meta: TransactionMetaSchema | None = None

    class Config:
        populate_by_name = True

    @property
    def log_lines(self) -> list[str]:
        if self.meta is None or not self.meta.log_messages:
            return []
        return self.meta.log_messages
