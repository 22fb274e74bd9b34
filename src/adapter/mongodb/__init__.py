from adapter.mongodb.connection import DATABASE_NAME, USERS_COLLECTION_NAME, get_mongodb_client

__all__ = ['DATABASE_NAME', 'USERS_COLLECTION_NAME', 'get_mongodb_client']
