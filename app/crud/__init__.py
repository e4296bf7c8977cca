from app.crud.crud_usuario import usuario
from app.crud.crud_mesa import mesa
from app.crud.crud_pedido import pedido
from app.crud.crud_estatistica import estatistica
