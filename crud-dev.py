# Development server for the CRUD application using in-memory storage backend
from crud_lib.main import create_app
from crud_lib.config import Config
app = create_app(Config(storage_backend='memory', log_level='DEBUG'))
if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
