"""Domain layer errors.

Every failure the category and comment services can report is a distinct
subclass of DomainError so the interface layer can map each one to an
HTTP status without inspecting messages.
"""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Missing or malformed input."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class PostNotFoundError(NotFoundError):
    """The post a comment targets does not exist."""

    def __init__(self, identifier: str):
        super().__init__("Post", identifier)


class ParentNotFoundError(NotFoundError):
    """A parent reference does not resolve."""

    def __init__(self, resource: str, identifier: str):
        super().__init__(f"Parent {resource.lower()}", identifier)
        self.resource = resource


class TargetNotFoundError(NotFoundError):
    """Merge target category does not exist."""

    def __init__(self, identifier: str):
        super().__init__("Target category", identifier)


class SomeSourcesNotFoundError(NotFoundError):
    """One or more merge source categories do not exist."""

    def __init__(self, missing: list[str]):
        self.missing = missing
        super().__init__("Source categories", ", ".join(missing))


class DuplicateSlugError(DomainError):
    """Another entity already owns this slug."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Category with slug '{slug}' already exists")


class SelfParentError(DomainError):
    """A category was given itself as parent."""

    def __init__(self, category_id: str):
        super().__init__(f"Category {category_id} cannot be its own parent")


class CircularHierarchyError(DomainError):
    """Setting the parent would create a cycle."""

    def __init__(self, category_id: str, parent_id: str):
        self.category_id = category_id
        self.parent_id = parent_id
        super().__init__(
            f"Cannot create circular category hierarchy: {parent_id} "
            f"descends from {category_id}"
        )


class HasPostsError(DomainError):
    """Delete refused while posts reference the category."""

    def __init__(self, category_id: str, count: int):
        self.count = count
        super().__init__(
            f"Cannot delete category {category_id} with {count} posts. "
            "Please reassign or delete posts first."
        )


class HasSubcategoriesError(DomainError):
    """Delete refused while subcategories reference the category."""

    def __init__(self, category_id: str, count: int):
        self.count = count
        super().__init__(
            f"Cannot delete category {category_id} with {count} subcategories. "
            "Please reassign subcategories first."
        )


class ForbiddenError(DomainError):
    """Raised when a caller acts on content they don't own."""

    def __init__(self, action: str, resource: str, resource_id: str):
        super().__init__(f"Not authorized to {action} {resource} {resource_id}")
