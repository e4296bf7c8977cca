# app/schemas/cep.py
from pydantic import BaseModel


class CepSchemas(BaseModel):
    cep: str
    logradouro: str = ""
    complemento: str = ""
    bairro: str = ""
    localidade: str = ""
    uf: str = ""
    # "logradouro, bairro" (ou só o bairro), pronto para o campo rua do endereço
    rua: str = ""
