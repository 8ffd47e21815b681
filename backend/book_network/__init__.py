"""Book Network: rede social de empréstimo de livros entre usuários."""
