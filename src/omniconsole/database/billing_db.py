from bson import ObjectId
from typing import List

# Utils
from omniconsole.utils.time_utils import utc_now

# Database
from omniconsole.database.base_db import BaseDB, NEWEST_FIRST

# Exceptions
from omniconsole.exceptions.console_exception import ConflictException, NotFoundException

# Models
from omniconsole.models.billing_data import TransactionData

"""
Database class for the tenant ledger
"""
class BillingDB(BaseDB):
    collection_name = "transactions"
    service_name = "BillingDB"

    async def get_transactions(self, tenant_id: str) -> List[TransactionData]:
        records = await self._find_documents({"tenantId": tenant_id}, "get_transactions", sort=NEWEST_FIRST)
        return [TransactionData.model_validate(record) for record in records]

    async def apply_transaction(self, transaction: TransactionData) -> TransactionData:
        """
        Move the tenant balance from balanceBefore to balanceAfter and insert the
        ledger row, both inside one MongoDB transaction.

        The balance update only matches while the stored balance still equals
        balanceBefore; otherwise another write got there first and nothing is
        committed.
        """
        client_data = self.mongo_client.get_client_for_current_loop()
        tenants = client_data['collections']['tenants']
        transactions = client_data['collections']['transactions']
        try:
            async with await client_data['client'].start_session() as session:
                async with session.start_transaction():
                    tenant_filter = {"_id": ObjectId(transaction.tenantId)}
                    result = await tenants.update_one(
                        {**tenant_filter, "balance": transaction.balanceBefore},
                        {"$set": {"balance": transaction.balanceAfter, "updatedAt": utc_now()}},
                        session=session
                    )
                    if result.matched_count == 0:
                        exists = await tenants.count_documents(tenant_filter, session=session)
                        if not exists:
                            raise NotFoundException(message="Tenant not found")
                        raise ConflictException(message="Balance changed while the transaction was being recorded, please retry")

                    document = transaction.model_dump(exclude={"id"})
                    insert_result = await transactions.insert_one(document, session=session)
                    document["_id"] = insert_result.inserted_id

            self.log_util.info(
                service_name=self.service_name,
                message=f"Recorded {transaction.type} of {transaction.amount} for tenant {transaction.tenantId}: {transaction.balanceBefore} -> {transaction.balanceAfter}"
            )
            return TransactionData.model_validate(self._from_document(document))
        except Exception as e:
            self._handle_db_operation("apply_transaction", e)
