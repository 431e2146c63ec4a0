# Services package.
#
# Each module exposes one service class that orchestrates repository calls
# for a single aggregate:
#
#   post_service     : post CRUD + the like/comment counter hooks
#   comment_service  : comment CRUD, transactional comment_count, reply trees
#   like_service     : like CRUD, transactional like_count, toggle
#
# Services receive their repositories (and, where they open transactions,
# the session factory) through their constructors; see
# ``post_service.dependencies.build_container``.
