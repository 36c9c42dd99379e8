"""
Core do netplan-layers.

Este pacote contém o motor de configuração em camadas: o merge de
fragmentos ordenados, a Store com resolução de dono e o rastreamento
de fragmentos sujos.

Componentes principais:
    - tree       → variantes de nó (escalar, sequência, mapping) e igualdade estrutural
    - merge      → `combine` / `fold` e política de listas
    - store      → LayeredConfigStore (plano, dono, dirty set, flush)
    - config     → settings explícitos da ferramenta
    - exceptions → taxonomia de erros com payload serializável

Princípios fundamentais:
    - O plano é sempre derivado, nunca editado diretamente
    - Toda escrita vai para um único fragmento, escolhido de forma determinística
    - Apenas fragmentos alterados são gravados

Limites explícitos:
    - Não valida semântica de rede
    - Não depende de variáveis de ambiente ou de descoberta de binários
"""
